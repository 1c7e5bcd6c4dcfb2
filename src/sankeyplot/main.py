"""
Application Initialization
==========================
This module constructs the MVC (Model-View-Controller) pieces and starts
the Qt Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Instantiates the application state and its controller.
2. Instantiates the Main Window (View).
3. Passes the controller into the View so they can communicate.
4. Prevents circular import errors by being the orchestrator.
"""
import argparse
import logging
import sys
from typing import Optional, Sequence

from sankeyplot.application import create_app
from sankeyplot.controller.loader import DiagramController
from sankeyplot.logging_config import setup_logging
from sankeyplot.model.state import DiagramState
from sankeyplot.view.main_window import MainWindow

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sankeyplot", description="Two-tier Sankey flow diagram viewer")
    parser.add_argument("data_file", nargs="?", help="Data file to open at startup")
    parser.add_argument(
        "--log-level",
        default="INFO",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Logging level (default: INFO)",
    )
    parser.add_argument("--log-file", default=None, help="Also write the log to this file")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    argv = list(sys.argv if argv is None else argv)

    # 1. Create the Qt Application (it strips the Qt specific arguments)
    app = create_app(argv)

    # 2. Setup Logging (Console + Optional File)
    args, _qt_args = build_arg_parser().parse_known_args(app.arguments()[1:])
    setup_logging(level=args.log_level, log_file=args.log_file)

    # 3. Initialize the state and its controller
    controller = DiagramController(DiagramState())

    # 4. Initialize the Main Window, passing the controller
    window = MainWindow(controller)
    window.show()

    # A failure is reported through controller.load_failed -> window.on_load_failed
    if args.data_file:
        controller.load_file(args.data_file)

    # 5. Start Event Loop
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
