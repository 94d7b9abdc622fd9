"""`schema-visualize`: write the configured database schema as an SVG diagram."""

import argparse
from pathlib import Path

from ..auth import TokenProvider
from ..config import config_path, load_config
from ..errors import ConfigError
from ..logging_utils import configure_logging
from .catalog import connect, read_relationships, read_tables
from .svg import render_svg


def generate(config_file: Path, output: Path) -> Path:
    config = load_config(config_file)
    configure_logging(config.observability.log_level)
    if config.database is None:
        raise ConfigError("Missing config section: database")
    connection_config = config.database.current()

    with connect(connection_config, TokenProvider(connection_config)) as connection:
        tables = read_tables(connection, connection_config.schema)
        relationships = read_relationships(connection, connection_config.schema)

    output.write_text(render_svg(tables, relationships), encoding="utf-8")
    return output


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Generate a visual representation of the database schema"
    )
    parser.add_argument(
        "--output", default="schema.svg", help="Where to write the SVG (default: schema.svg)"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Config file (default: $PLANT_IDENTIFIER_CONFIG or config.example.yml)",
    )
    args = parser.parse_args()

    output = generate(args.config or config_path(), Path(args.output))
    print(f"Schema visualization saved to {output}")


if __name__ == "__main__":
    main()
