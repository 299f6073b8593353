#!/usr/bin/env python3
"""
Terminal front end for the chat widget.

Usage: leadchat-chat --url http://localhost:5000
"""

import argparse
import asyncio
import logging
import sys
from typing import List, TextIO

from ..models.chat import Message
from .client import RelayClient
from .state import ChatWidget

CLOSE_COMMAND = "/close"


class TerminalView:
    """Prints each new log entry as it is appended"""

    def __init__(self, out: TextIO = sys.stdout):
        self.out = out
        self.rendered = 0

    def render(self, messages: List[Message]) -> None:
        for message in messages[self.rendered:]:
            self.out.write(f"{message.speaker.value}: {message.text}\n")
        self.rendered = len(messages)
        self.out.flush()

    def show_typing(self) -> None:
        self.out.write("Bot is typing...\n")
        self.out.flush()


async def run_chat(widget: ChatWidget, view: TerminalView, read_line=input) -> None:
    """Read lines until /close or end of input, sending each one through the widget"""
    widget.subscribe(view.render)
    widget.toggle()
    view.out.write(f"Support Chat (type {CLOSE_COMMAND} to leave)\n")

    while widget.is_open:
        try:
            line = await asyncio.to_thread(read_line, "> ")
        except EOFError:
            break
        if line.strip() == CLOSE_COMMAND:
            widget.toggle()
            break

        widget.set_input(line)
        if widget.input.strip():
            view.show_typing()
        await widget.send_message()


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Lead Chat terminal widget")
    parser.add_argument(
        "--url",
        default="http://localhost:5000",
        help="Base URL of the relay server"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log relay errors to stderr"
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO if args.verbose else logging.CRITICAL)

    widget = ChatWidget(RelayClient(args.url))
    try:
        asyncio.run(run_chat(widget, TerminalView()))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
