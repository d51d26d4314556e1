from __future__ import annotations

import logging
import sys

from apps.cli.commands.check_symbols import CheckSymbolsCli

_USAGE = (
    "Usage:\n"
    "  check VALUE [VALUE ...] [--catalog PATH] [--report-format text|json]\n"
)


def _configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    _configure_logging()
    args = argv if argv is not None else sys.argv[1:]

    if not args:
        print(_USAGE)
        return 2

    cmd = args[0]
    rest = args[1:]

    if cmd == "check":
        return CheckSymbolsCli().run(rest)

    print(f"unknown command: {cmd}\n\n{_USAGE}")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
