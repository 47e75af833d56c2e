# utilities: logging, config and snapshot persistence
