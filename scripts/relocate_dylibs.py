#!/usr/bin/env python3
"""Copy an executable's dylibs into a folder and make it relocatable."""

from dylib_relocate.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
