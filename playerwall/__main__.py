"""
__main__.py

This file adds support for running playerwall as a python module instead of invoking the "playerwall" command line entrypoint.

    $ python -m playerwall --help
"""


from playerwall.cli import main


if __name__ == "__main__":
    main()
