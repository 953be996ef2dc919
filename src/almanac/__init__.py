# SPDX-License-Identifier: MIT

from almanac.cleanup import register_cleanup
from almanac.initialize import initialize
from almanac.terminal.app import run


def main() -> None:
    initialize()
    register_cleanup()
    run()


if __name__ == "__main__":
    main()
