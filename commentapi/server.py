"""Application entry point: wires storage, service and HTTP handler."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Mapping, Sequence

from .comment import CommentService
from .db import DatabaseError, connect
from .transport import Handler

_log = logging.getLogger(__name__)


def run(environ: Mapping[str, str] | None = None) -> None:
    """Connect, migrate and serve until interrupted."""
    _log.info("starting up our app")
    try:
        database = connect(environ)
    except DatabaseError:
        _log.error("Failed to connect to the database")
        raise
    try:
        try:
            database.migrate()
        except DatabaseError:
            _log.error("failed to migrate database")
            raise
        Handler(CommentService(database)).serve()
    finally:
        database.close()


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Serve the comment REST API.")
    parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)
    print("Comment REST API")
    try:
        run()
    except DatabaseError as exc:
        print(exc)


if __name__ == "__main__":
    main()