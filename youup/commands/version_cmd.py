"""
Version command - displays youup version information
"""

from youup.version import YOUUP_VERSION


def run_version(verbose: bool = False) -> None:
    """
    Display youup version information.

    Args:
        verbose: If True, show additional details like full hash and date
    """
    if verbose:
        print(f"youup version {YOUUP_VERSION.full_version()}")
        print("\nDetailed version information:")
        print(f"  Semantic Version: {YOUUP_VERSION.major}.{YOUUP_VERSION.minor}.{YOUUP_VERSION.patch}")
        print(f"  Release Date:     {YOUUP_VERSION.date_string()}")
        print(f"  Source Hash:      {YOUUP_VERSION.hash}")
    else:
        print(f"youup {YOUUP_VERSION}")
