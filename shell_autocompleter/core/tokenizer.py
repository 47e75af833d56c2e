# tokenizer.py - command line splitting shared by training and suggestion

from typing import List


def split_command(command: str) -> List[str]:
    """
    Split on single spaces, keeping empty tokens.
    "git  push" -> ["git", "", "push"]; this mirrors what training sees.
    """
    return command.split(" ")
