"""Demo screen: ``python -m domtui``.

Two paragraphs beside a column of input fields.  Tab / shift+tab move focus,
ctrl+c or ctrl+q quits.
"""

from __future__ import annotations

import argparse
import logging

from domtui import (
    InputField,
    Node,
    Paragraph,
    ScreenOptions,
    hstack,
    leaf,
    run,
    vstack,
)

BLACK_ON_YELLOW = "\x1b[103;30m"
BLACK_ON_CYAN = "\x1b[106;30m"
LIGHT_RED = "\x1b[91m"
LIGHT_YELLOW = "\x1b[93m"
DARK_GRAY = "\x1b[90m"
RESET = "\x1b[0m"


def _styled(sgr: str):
    return lambda s: f"{sgr}{s}{RESET}"


def build() -> Node:
    return hstack(
        leaf(
            Paragraph(
                "HELLO\n(This view has a preferred size of 16*16)",
                style=_styled(BLACK_ON_YELLOW),
            ),
            preferred=(16, 16),
        ),
        leaf(
            Paragraph(
                "WORLD\n(This view doesn't have a preferred size, "
                "it just spreads out equally with other views)",
                style=_styled(BLACK_ON_CYAN),
                border=True,
                title="Borders!",
                border_style=_styled(LIGHT_RED),
            )
        ),
        vstack(
            leaf(
                InputField(
                    placeholder="Type something here...",
                    border=True,
                    border_style=_styled(DARK_GRAY),
                    focused_border_style=_styled(LIGHT_YELLOW),
                ),
                "input_field0",
            ),
            leaf(
                InputField(
                    placeholder="Type something here...",
                    text="UTF-8 文本编辑!",
                    caret_at_end=True,
                    border=True,
                    border_style=_styled(DARK_GRAY),
                    focused_border_style=_styled(LIGHT_YELLOW),
                ),
                "input_field1",
                preferred=(None, 4),
            ),
        ),
    )


def main() -> None:
    parser = argparse.ArgumentParser(description="domtui demo screen")
    parser.add_argument("--log-file", default=None, help="Write logs to this file (stdout is the UI)")
    parser.add_argument("--log-level", default="info", choices=["debug", "info", "warning", "error"])
    parser.add_argument("--no-mouse", action="store_true", help="Disable mouse reporting")
    args = parser.parse_args()

    if args.log_file:
        logging.basicConfig(
            filename=args.log_file,
            level=getattr(logging, args.log_level.upper()),
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        )

    run(build, options=ScreenOptions(mouse=not args.no_mouse))


if __name__ == "__main__":
    main()
