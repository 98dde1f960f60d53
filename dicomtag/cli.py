# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Command-line interface for dicomtag

Parses tag text, tests tags against masks and locates private creator
elements.

Copyright 2025 DNAi inc.
"""

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from dicomtag import config
from dicomtag.log_utils import setup_logging
from dicomtag.mask import DicomTagMask
from dicomtag.tag import DicomTag


logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_MALFORMED_TAG = 1
EXIT_MALFORMED_MASK = 2


def tag_info(tag: DicomTag) -> Dict[str, Any]:
    """
    Describe a tag as a dictionary of display fields.

    Args:
        tag: Tag to describe

    Returns:
        Dictionary with tag, card, group, element and private details
    """
    info = {
        'tag': str(tag),
        'card': f"{tag.card:08x}",
        'group': f"{tag.group:04x}",
        'element': f"{tag.element:04x}",
        'private': tag.is_private,
    }
    if tag.is_private:
        info['private_group'] = f"{tag.private_group:02x}"
        if tag.element > 0x00FF:
            info['private_creator_tag'] = str(DicomTag.private_creator_tag(tag.group, tag.element))
    return info


def format_output(records: List[Dict[str, Any]], format_type: str = "text") -> str:
    """
    Format records for output.

    Args:
        records: Records to print
        format_type: Output format ('text' or 'json')

    Returns:
        Formatted output string
    """
    if format_type == "json":
        return json.dumps(records, indent=2)
    lines = []
    for record in records:
        lines.append("  ".join(f"{key}={value}" for key, value in record.items()))
    return "\n".join(lines)


def cmd_parse(args: argparse.Namespace) -> int:
    records = []
    status = EXIT_OK
    for text in args.tags:
        tag = DicomTag.parse(text)
        if tag is None:
            logger.warning("Malformed tag: %r", text)
            records.append({'input': text, 'error': 'malformed tag'})
            status = EXIT_MALFORMED_TAG
            continue
        records.append({'input': text, **tag_info(tag)})
    print(format_output(records, args.format))
    return status


def cmd_match(args: argparse.Namespace) -> int:
    mask = DicomTagMask.parse(args.pattern)
    if mask is None:
        print(f"Error: malformed mask pattern: {args.pattern!r}", file=sys.stderr)
        return EXIT_MALFORMED_MASK

    records = []
    status = EXIT_OK
    for text in args.tags:
        tag = DicomTag.parse(text)
        if tag is None:
            logger.warning("Malformed tag: %r", text)
            records.append({'input': text, 'error': 'malformed tag'})
            status = EXIT_MALFORMED_TAG
            continue
        records.append({'tag': str(tag), 'mask': str(mask), 'match': mask.is_match(tag)})
    print(format_output(records, args.format))
    return status


def cmd_creator(args: argparse.Namespace) -> int:
    tag = DicomTag.parse(args.tag)
    if tag is None:
        print(f"Error: malformed tag: {args.tag!r}", file=sys.stderr)
        return EXIT_MALFORMED_TAG
    if not tag.is_private or tag.element <= 0x00FF:
        print(f"Error: {tag} is not a private data element", file=sys.stderr)
        return EXIT_MALFORMED_TAG

    creator = DicomTag.private_creator_tag(tag.group, tag.element)
    print(format_output([{'tag': str(tag), 'private_creator_tag': str(creator)}], args.format))
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dicomtag",
        description="dicomtag - Parse and match DICOM tags",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Canonicalise tags
  dicomtag parse 00100020 "(0010,0010)"

  # JSON output
  dicomtag parse 0009,1001 --format json

  # Test tags against a repeating-group mask
  dicomtag match 50xx,1003 5003,1003 5003,1004

  # Find the creator element of a private tag
  dicomtag creator 0009,1001
        """
    )
    parser.add_argument('--log-level', choices=config.LOG_LEVELS, default=None,
                        help=f'Logging level (default: ${config.LOG_LEVEL_ENV} or {config.DEFAULT_LOG_LEVEL})')
    output_options = argparse.ArgumentParser(add_help=False)
    output_options.add_argument('--format', choices=config.OUTPUT_FORMATS, default='text',
                                help='Output format')

    subparsers = parser.add_subparsers(dest='command', required=True)

    parse_parser = subparsers.add_parser('parse', parents=[output_options], help='Parse tags into canonical form')
    parse_parser.add_argument('tags', nargs='+', help='Tag text, e.g. (0010,0010) or 00100010')
    parse_parser.set_defaults(handler=cmd_parse)

    match_parser = subparsers.add_parser('match', parents=[output_options], help='Test tags against a mask pattern')
    match_parser.add_argument('pattern', help='Mask pattern, e.g. 50xx,1003')
    match_parser.add_argument('tags', nargs='+', help='Tags to test')
    match_parser.set_defaults(handler=cmd_match)

    creator_parser = subparsers.add_parser('creator', parents=[output_options],
                                           help='Show the private creator element of a private tag')
    creator_parser.add_argument('tag', help='Private data element tag')
    creator_parser.set_defaults(handler=cmd_creator)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the command-line tool.

    Args:
        argv: Arguments without the program name, defaults to sys.argv[1:]

    Returns:
        Process exit status
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(level=args.log_level)
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
