"""
Index maintenance commands.

Usage:
    es-bundle index:create [--no-mapping]
    es-bundle index:drop --force
    es-bundle type:update [--type product --type category] --force
    es-bundle index:export dump.jsonl [--chunk 500]
    es-bundle index:import dump.jsonl [--chunk 500]

Every command accepts ``--manager`` (default ``default``) and ``--config``
(YAML file, see :mod:`es_bundle.config`).
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from es_bundle.config import load_config
from es_bundle.container import Container
from es_bundle.core.exceptions import BundleError

logger = logging.getLogger(__name__)

DEFAULT_CHUNK = 500
EXPORT_SCROLL = "5m"


def create_index(container: Container, args: argparse.Namespace) -> int:
    connection = container.get_manager(args.manager).get_connection()
    connection.create_index(no_mapping=args.no_mapping)
    print(f"Created index {connection.get_index_name()}")
    return 0


def drop_index(container: Container, args: argparse.Namespace) -> int:
    connection = container.get_manager(args.manager).get_connection()
    if not args.force:
        print(f"Index {connection.get_index_name()} was not dropped, use --force to drop it")
        return 1
    connection.drop_index()
    print(f"Dropped index {connection.get_index_name()}")
    return 0


def update_types(container: Container, args: argparse.Namespace) -> int:
    connection = container.get_manager(args.manager).get_connection()
    if not args.force:
        print("Mapping was not updated, use --force to update it")
        return 1
    if connection.update_mapping(args.type or None):
        print(f"Updated mapping of {connection.get_index_name()}")
    else:
        print(f"Mapping of {connection.get_index_name()} is already up to date")
    return 0


def export_index(container: Container, args: argparse.Namespace) -> int:
    """Write every document of the index to a JSON lines file."""
    connection = container.get_manager(args.manager).get_connection()
    pages = connection.scan({"query": {"match_all": {}}, "size": args.chunk}, EXPORT_SCROLL)
    exported = 0

    try:
        with open(args.file, "w", encoding="utf-8") as file:
            for response in pages:
                hits = response["hits"]["hits"]
                for hit in hits:
                    file.write(json.dumps({"_id": hit["_id"], "_source": hit["_source"]}, ensure_ascii=False))
                    file.write("\n")
                exported += len(hits)
                logger.info("Exported %d documents", exported)
    finally:
        pages.close()

    print(f"Exported {exported} documents from {connection.get_index_name()} to {args.file}")
    return 0


def import_index(container: Container, args: argparse.Namespace) -> int:
    """Index documents from a JSON lines file written by ``index:export``."""
    manager = container.get_manager(args.manager)
    manager.check_writable("import")
    connection = manager.get_connection()
    type_field = connection.get_type_field()
    imported = 0

    with open(args.file, "r", encoding="utf-8") as file:
        for line in file:
            if not line.strip():
                continue
            document = json.loads(line)
            source = dict(document["_source"])
            doc_type = source.pop(type_field, None)
            source["_id"] = document["_id"]
            connection.bulk("index", doc_type, source)
            imported += 1

            if imported % args.chunk == 0:
                connection.commit()
                logger.info("Imported %d documents", imported)

    connection.commit()
    print(f"Imported {imported} documents into {connection.get_index_name()}")
    return 0


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


COMMANDS = {
    "index:create": create_index,
    "index:drop": drop_index,
    "type:update": update_types,
    "index:export": export_index,
    "index:import": import_index,
}


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--manager", "-m", default="default", help="Manager name (default: default)")
    common.add_argument("--config", "-c", default=None, help="Bundle config file (YAML)")
    common.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    parser = argparse.ArgumentParser(prog="es-bundle", description="Elasticsearch index maintenance")
    subparsers = parser.add_subparsers(dest="command", required=True)

    create = subparsers.add_parser("index:create", parents=[common], help="Create the index")
    create.add_argument("--no-mapping", action="store_true", help="Create the index without mappings")

    drop = subparsers.add_parser("index:drop", parents=[common], help="Drop the index")
    drop.add_argument("--force", action="store_true", help="Required to actually drop the index")

    update = subparsers.add_parser("type:update", parents=[common], help="Update the index mapping")
    update.add_argument("--type", "-t", action="append", help="Type to update, repeatable (default: all)")
    update.add_argument("--force", action="store_true", help="Required to actually update the mapping")

    export = subparsers.add_parser("index:export", parents=[common], help="Export documents to JSON lines")
    export.add_argument("file", help="Output file")
    export.add_argument("--chunk", type=positive_int, default=DEFAULT_CHUNK, help="Documents per scroll request")

    import_ = subparsers.add_parser("index:import", parents=[common], help="Import documents from JSON lines")
    import_.add_argument("file", help="Input file")
    import_.add_argument("--chunk", type=positive_int, default=DEFAULT_CHUNK, help="Documents per bulk request")

    return parser


def main(argv: Optional[List[str]] = None, container: Optional[Container] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    try:
        container = container or Container(load_config(args.config))
        return COMMANDS[args.command](container, args)
    except BundleError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
