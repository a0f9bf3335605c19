import argparse

from pacman_ipfs_sync.utils.misc import parse_toggle


def toggle(value: str) -> bool:
    parsed = parse_toggle(value)
    if parsed is None:
        raise argparse.ArgumentTypeError(  # noqa: TRY003
            f"invalid toggle value '{value}' (use yes/no, true/false, on/off or 1/0)"
        )
    return parsed
