from . import defaults, exit_codes, filenames, keys

__all__ = ["defaults", "exit_codes", "filenames", "keys"]
