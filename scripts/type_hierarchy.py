#!/usr/bin/env python3
import argparse
import asyncio
import json
import logging
import os
import sys
from pathlib import Path

# Ensure typehierarchy is in path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from typehierarchy.core.config import configure_logging, load_config
from typehierarchy.core.loader import load_hierarchies
from typehierarchy.core.registry import TypeHierarchyProviderRegistry
from typehierarchy.core.validator import ValidationError
from typehierarchy.host.commands import commands
from typehierarchy.host.dispatcher import PREPARE_COMMAND, SUBTYPES_COMMAND, SUPERTYPES_COMMAND
from typehierarchy.models.item_model import Position
from typehierarchy.models.protocol_model import TypeHierarchyPrepareParams

logger = logging.getLogger("typehierarchy")


def parse_target(target: str) -> TypeHierarchyPrepareParams:
    """Turn FILE:LINE:CHARACTER into prepare request params"""
    try:
        path, line, character = target.rsplit(":", 2)
        position = Position(int(line), int(character))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected FILE:LINE:CHARACTER, got {target!r}")
    return TypeHierarchyPrepareParams(Path(path).resolve().as_uri(), position)


async def main():
    parser = argparse.ArgumentParser(description="Browse a declared type hierarchy")
    parser.add_argument("target", type=parse_target,
                        help="FILE:LINE:CHARACTER, zero-based line and character")
    parser.add_argument("--config", type=Path, help="YAML config file.")
    parser.add_argument("--hierarchy-dir", type=Path,
                        help="Directory of *.yml declarations. Overrides the config.")
    parser.add_argument("--supertypes", action="store_true", help="Also list supertypes of the root.")
    parser.add_argument("--subtypes", action="store_true", help="Also list subtypes of the root.")

    args = parser.parse_args()

    try:
        config = load_config(args.config)
    except ValidationError as e:
        print(f"Error: {e}")
        sys.exit(1)
    configure_logging(config)

    registry = TypeHierarchyProviderRegistry()
    registry.dispatcher.configure(config)
    try:
        providers = load_hierarchies(args.hierarchy_dir or config.hierarchy_dir, config.strict_mode)
    except ValidationError as e:
        print(f"Error: {e}")
        sys.exit(1)
    if not providers:
        print("Error: no hierarchy declarations loaded.")
        sys.exit(1)

    roots = await commands.execute_command(PREPARE_COMMAND, args.target)
    output = {"prepare": [item.to_dict() for item in roots]}
    if roots:
        if args.supertypes:
            items = await commands.execute_command(SUPERTYPES_COMMAND, roots[0])
            output["supertypes"] = [item.to_dict() for item in items]
        if args.subtypes:
            items = await commands.execute_command(SUBTYPES_COMMAND, roots[0])
            output["subtypes"] = [item.to_dict() for item in items]
    else:
        logger.info("No type found at %s", args.target.document_uri)

    print(json.dumps(output, indent=2))

if __name__ == "__main__":
    asyncio.run(main())
