#!/usr/bin/env python3
"""
Generate a bulk set of synthetic HL7 v2 messages for testing/demo.

Every registered message type can be produced:
    ADT, ORM, ORU, SIU, RDE, MDM, DFT, VXU

Features:
- One message type with a fixed event, or "mixed" to draw a random
  registered type and event per message
- Rotates or fixes line endings: CR, LF, CRLF (HL7 expects CR)
- Deterministic output with --seed
- Optional single stream file holding every message

Examples:
    # 1000 ADT^A01 messages into a per-file bulk directory
    python scripts/generate_bulk.py \
        --count 1000 \
        --out tests/data/adt_a01_bulk \
        --message-type ADT --event A01

    # 200 mixed messages plus a single stream file
    python scripts/generate_bulk.py \
        --count 200 \
        --out tests/data/hl7_bulk \
        --message-type mixed \
        --stream-file tests/data/hl7_stream/mixed_stream.hl7 \
        --line-endings mix \
        --seed 22
"""

from __future__ import annotations

import argparse
import random
from datetime import datetime, timedelta, timezone
from pathlib import Path

from hl7_codec.config import AppConfig
from hl7_codec.fields import Explicit
from hl7_codec.generator import generate_message
from hl7_codec.synthetic import SyntheticDataGenerator
from hl7_codec.templates.registry import available_events

SEED = 22

BASE_DT = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def _apply_line_endings(text: str, mode: str, idx: int) -> bytes:
    """
    HL7 expects \\r (CR). Provide flexibility:
        - 'cr'   => \\r
        - 'lf'   => \\n
        - 'crlf' => \\r\\n
        - 'mix'  => cycles [CR, LF, CRLF] by index
    """
    mode = mode.lower()
    if mode == "mix":
        mode = ["cr", "lf", "crlf"][idx % 3]
    if mode == "cr":
        sep = "\r"
    elif mode == "lf":
        sep = "\n"
    elif mode == "crlf":
        sep = "\r\n"
    else:
        raise ValueError("line endings must be one of: cr|lf|crlf|mix")
    return sep.join(text.split("\r")).encode("utf-8")


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Generate bulk synthetic HL7 v2 messages.")
    p.add_argument("--count", type=int, default=100, help="Number of messages.")
    p.add_argument(
        "--out",
        type=Path,
        default=Path("tests/data/hl7_bulk"),
        help="Directory for per-message files.",
    )
    p.add_argument(
        "--message-type",
        default="mixed",
        help='Message type (e.g. ADT) or "mixed" for a random type per message.',
    )
    p.add_argument(
        "--event",
        default=None,
        help="Event for a fixed message type (default event when omitted).",
    )
    p.add_argument(
        "--line-endings",
        default="cr",
        choices=["cr", "lf", "crlf", "mix"],
        help="Segment terminator to write.",
    )
    p.add_argument("--seed", type=int, default=SEED, help="Random seed.")
    p.add_argument(
        "--stream-file",
        type=Path,
        default=None,
        help=(
            "Optional path to a single HL7 stream file. "
            "Messages are appended one after another, separated by a blank line."
        ),
    )
    return p.parse_args()


def main() -> None:
    args = parse_args()

    rng = random.Random(args.seed)
    outdir: Path = args.out
    outdir.mkdir(parents=True, exist_ok=True)

    cfg = AppConfig()
    events = available_events()

    def gen_message(i: int) -> str:
        # Each message gets its own clock tick so timestamps stay ordered.
        synthetic = SyntheticDataGenerator.from_config(
            cfg,
            seed=rng.randint(0, 2**31),
            clock=lambda: BASE_DT + timedelta(minutes=i),
        )
        if args.message_type.lower() == "mixed":
            message_type = rng.choice(sorted(events))
            event = rng.choice(events[message_type])
        else:
            message_type, event = args.message_type, args.event
        result = generate_message(
            message_type,
            event,
            {"controlId": Explicit(f"MSG{i:06d}")},
            config=cfg,
            synthetic=synthetic,
        )
        return result.message

    stream_fp = None
    if args.stream_file is not None:
        args.stream_file.parent.mkdir(parents=True, exist_ok=True)
        stream_fp = args.stream_file.open("wb")

    try:
        for i in range(1, args.count + 1):
            payload = _apply_line_endings(gen_message(i), args.line_endings, i)

            # Per-message bulk files with stable, sortable names
            (outdir / f"msg_{i:04d}.hl7").write_bytes(payload)

            if stream_fp is not None:
                stream_fp.write(payload)
                stream_fp.write(b"\n\n")
    finally:
        if stream_fp is not None:
            stream_fp.close()

    print(f"Generated {args.count} messages in {outdir}")
    if args.stream_file is not None:
        print(f"Also wrote stream file: {args.stream_file}")


if __name__ == "__main__":
    main()
