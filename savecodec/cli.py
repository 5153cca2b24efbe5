#!/usr/bin/env python3
"""
Save Codec Command Line

Commands:
    info    Show the detected generation, version and checksum of a save
    verify  Decode and re-encode a save and require identical bytes
    dump    Write every field of a save as JSON (path -> value)

Usage:
    savecodec --formats formats.ini info ME3Save.pcsav
    savecodec --formats formats.ini verify ME3Save.pcsav --ignore-footer
    savecodec --formats formats.ini --generation me3 dump ME3Save.pcsav -o save.json
"""

import sys
import argparse
import json
from enum import Enum
from pathlib import Path
from typing import Any, List, Optional

from .constants import CHECKSUM_SIZE, VERSION_SIZE
from .errors import SaveCodecError
from .formats import Backend, FormatRegistry
from .roundtrip import verify_round_trip
from .save_file import decode
from .tagged.properties import read_property_list
from .utils import crc32_bzip2, get_counts, init_logging, log, logError, print_summary


def _json_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, (bytes, bytearray)):
        return value.hex()
    if isinstance(value, tuple):
        return [_json_value(v) for v in value]
    return value


def cmd_info(args, registry: FormatRegistry) -> int:
    data = Path(args.file).read_bytes()
    save = decode(data, generation=args.generation, registry=registry)
    generation = save.generation

    log(f"File: {args.file} ({len(data):,} bytes)")
    log(f"  Generation: {generation.name}")
    log(f"  Version: {save.version}")
    log(f"  Body: {generation.backend.value}")

    if generation.backend is Backend.TAGGED:
        end = len(data) - (CHECKSUM_SIZE if generation.checksum else 0)
        properties = read_property_list(data[VERSION_SIZE:end])
        log(f"  Properties: {len(properties)}")
        for name, type_tag, size in properties:
            log(f"    {name}: {type_tag} ({size:,} bytes)")

    if save.checksum is not None:
        computed = crc32_bzip2(data[:-CHECKSUM_SIZE])
        state = "matches" if computed == save.checksum else f"differs, computed 0x{computed:08X}"
        log(f"  Checksum: 0x{save.checksum:08X} ({state})")
    return 0


def cmd_verify(args, registry: FormatRegistry) -> int:
    data = Path(args.file).read_bytes()
    verify_round_trip(data, generation=args.generation, registry=registry, ignore_footer=args.ignore_footer)
    log(f"{args.file}: round trip OK ({len(data):,} bytes)")
    return 0


def cmd_dump(args, registry: FormatRegistry) -> int:
    data = Path(args.file).read_bytes()
    save = decode(data, generation=args.generation, registry=registry)

    fields = {path: _json_value(value) for path, value in save.fields()}
    document = {
        'generation': save.generation.name,
        'version': save.version,
        'checksum': save.checksum,
        'fields': fields,
    }
    text = json.dumps(document, indent=2, ensure_ascii=False)

    if args.output:
        Path(args.output).write_text(text, encoding='utf-8')
        log(f"Wrote {len(fields):,} fields to {args.output}")
    else:
        print(text)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='savecodec',
        description='Inspect and verify game save files',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example formats.ini:
    [me3]
    version = 59
    schema = mypackage.schemas:ME3_SAVE
    backend = positional
    checksum = true
        """
    )
    parser.add_argument('--formats', required=True,
                        help='INI file declaring the format generations')
    parser.add_argument('--generation', default=None,
                        help='Decode as this generation instead of detecting it from the version')
    parser.add_argument('--log', default=None,
                        help='Also write output to this log file')
    parser.add_argument('--verbose', action='store_true',
                        help='Show codec debug messages')

    commands = parser.add_subparsers(dest='command', required=True)

    info = commands.add_parser('info', help='Show generation, version and checksum')
    info.add_argument('file')
    info.set_defaults(handler=cmd_info)

    verify = commands.add_parser('verify', help='Check decode/encode reproduces the file')
    verify.add_argument('file')
    verify.add_argument('--ignore-footer', action='store_true',
                        help='Do not compare the trailing checksum')
    verify.set_defaults(handler=cmd_verify)

    dump = commands.add_parser('dump', help='Write all fields as JSON')
    dump.add_argument('file')
    dump.add_argument('-o', '--output', default=None,
                      help='Output JSON path (stdout when omitted)')
    dump.set_defaults(handler=cmd_dump)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    init_logging(Path(args.log) if args.log else None, verbose=args.verbose)

    try:
        registry = FormatRegistry.from_ini(args.formats)
        status = args.handler(args, registry)
    except (SaveCodecError, OSError) as e:
        logError(f"{e}")
        status = 1

    errors, warnings = get_counts()
    if errors or warnings:
        print_summary()
    return status


if __name__ == '__main__':
    sys.exit(main())
