#!/usr/bin/env python3
# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""CLI entry point for validating YAML files against a context of schemas."""

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import List, Sequence

from ..config import validator_config
from ..exceptions import DocumentLoadError, SchemaError, SchemaNotFoundError
from ..models.context import Context
from ..models.schema_document import SchemaDocument
from ..parsers.yaml_parser import yaml_parser
from ..utils.source_location import format_source, lookup_source
from ..validator import validate
from .report import ValidationReport

logger = logging.getLogger(__name__)

DESCRIPTION = """\
Validate YAML files against a context of any number of cross-referencing schema files.
The schema format is specific to this tool and is not compatible with JSON Schema."""


class _StopValidation(Exception):
    pass


def load_context(schema_paths: Sequence[Path]) -> Context:
    """Load every document of every schema file, in order, into a context.

    Raises:
        DocumentLoadError: If a schema file cannot be read or parsed as YAML
        SchemaError: If a document is not a valid schema
    """
    trees = []
    for schema_path in schema_paths:
        trees.extend(yaml_parser.load_documents(schema_path))
    logger.debug(f"Loaded {len(trees)} schema document(s) from {len(schema_paths)} file(s)")
    return Context.from_trees(trees)


def validate_files(
    schema: SchemaDocument,
    context: Context,
    file_paths: Sequence[Path],
    stop_at_first: bool = True,
) -> List[ValidationReport]:
    """Validate every document of every file.

    Returns:
        One ValidationReport per file that was processed. With ``stop_at_first``
        processing ends after the first failing document.
    """
    reports: List[ValidationReport] = []
    try:
        for file_path in file_paths:
            report = ValidationReport(file_path)
            reports.append(report)
            _validate_file(schema, context, report, stop_at_first)
    except _StopValidation:
        pass
    return reports


def _validate_file(schema: SchemaDocument, context: Context, report: ValidationReport, stop_at_first: bool) -> None:
    try:
        documents, source_maps = yaml_parser.load_documents_with_source(report.file_path)
    except DocumentLoadError as exc:
        report.add_error(str(exc))
        if stop_at_first:
            raise _StopValidation()
        return

    for index, document in enumerate(documents):
        try:
            validate(schema, document, context)
        except SchemaError as exc:
            source_map = source_maps[index] if index < len(source_maps) else None
            for error in exc.flatten():
                loc = lookup_source(source_map, error.path, report.file_path)
                report.add_error(
                    f"{error}{format_source(loc)}",
                    document=index,
                    path=error.path,
                    line=loc.line,
                    column=loc.column,
                )
            if stop_at_first:
                raise _StopValidation()
        else:
            report.add_valid(index)


def _print_human(reports: List[ValidationReport]) -> None:
    for report in reports:
        for index in report.valid_documents:
            print(f"{report.file_path}[{index}]: valid")
        if report.errors:
            print(f"\n{report.file_path}:")
            for error in report.errors:
                print(f"  ERROR: {error['message']}")


def _fail(message: str) -> None:
    print(f"failed: {message}")
    sys.exit(1)


def main(argv: List[str] | None = None) -> None:
    """Main entry point for the validator CLI."""
    parser = argparse.ArgumentParser(
        prog='yaml-schema-validator',
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        '-s', '--schema',
        dest='schemas',
        action='append',
        type=Path,
        help='Schema file to include in the context. Repeatable; schemas are added in order '
             'and references between them are not checked when loading.',
    )
    parser.add_argument(
        '-u', '--uri',
        required=True,
        help='URI of the schema to validate the files against.',
    )
    parser.add_argument(
        'files',
        nargs='*',
        type=Path,
        help='Files to validate against the selected schema.',
    )
    parser.add_argument(
        '--all',
        action='store_true',
        help='Report every failing document instead of stopping at the first one.',
    )
    parser.add_argument(
        '--format',
        choices=['human', 'json'],
        default='human',
        help='Output format (default: human)',
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable debug logging.',
    )

    args = parser.parse_args(argv)

    config = validator_config
    if args.verbose:
        config = dataclasses.replace(config, log_level='DEBUG')
    config.set_logging()

    if not args.schemas:
        _fail("No schemas supplied, see the --schema option for information")

    if not args.files:
        _fail("No files to validate were supplied, use --help for more information")

    try:
        context = load_context(args.schemas)
        schema = context.require_schema(args.uri)
    except (DocumentLoadError, SchemaError, SchemaNotFoundError) as exc:
        _fail(str(exc))

    stop_at_first = config.stop_at_first_failure and not args.all
    reports = validate_files(schema, context, args.files, stop_at_first=stop_at_first)

    total_errors = sum(len(r.errors) for r in reports)
    if args.format == 'json':
        output = {
            'uri': args.uri,
            'files': len(reports),
            'errors': total_errors,
            'results': [r.to_dict() for r in reports],
        }
        print(json.dumps(output, indent=2))
    else:
        _print_human(reports)

    if total_errors > 0:
        if args.format == 'human':
            failed_files = sum(1 for r in reports if not r.ok)
            print(f"failed: {total_errors} error(s) in {failed_files} file(s)")
        sys.exit(1)
    if args.format == 'human':
        print("All files validated successfully!")
    sys.exit(0)


if __name__ == '__main__':
    main()
