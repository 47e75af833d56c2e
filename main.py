# main.py - run the simulated shell from a source checkout

from shell_autocompleter.cli.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
