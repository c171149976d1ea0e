"""Allow `python -m mzinfo <path>`."""

from mzinfo.cli.mzinfo import main

if __name__ == "__main__":
    main(prog_name="mzinfo")
