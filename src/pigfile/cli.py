from __future__ import annotations
import argparse, json, logging, sys, wave
from pathlib import Path

from .binary.errors import FormatError
from .binary.formats import SOUND_SAMPLE_RATE
from .models.file import PigFile


def _open(path: str) -> PigFile:
    return PigFile.from_binary(path, strict=True)


def cmd_info(args):
    pig = _open(args.input)
    out = pig.directory.summary()
    if args.bitmaps:
        out["bitmaps"] = [
            dict(bm.model_dump(mode="json"), index=i, offset=pig.directory.bitmap_offsets[i],
                 disk_flags=pig.directory.bitmap_flags[i])
            for i, bm in enumerate(pig.bitmaps)
        ]
    if args.sounds:
        out["sounds"] = [
            dict(snd.model_dump(mode="json"), index=i, offset=pig.directory.sound_offsets[i])
            for i, snd in enumerate(pig.sounds)
        ]
    print(json.dumps(out, indent=2))


def cmd_bitmap(args):
    pig = _open(args.input)
    idx = pig.find_bitmap_index_by_name(args.name)
    if idx is None:
        print(f"no bitmap named {args.name!r}", file=sys.stderr)
        return 1
    bm = pig.bitmap(idx)
    Path(args.output).write_bytes(pig.get_bitmap_pixels(idx))
    print(f"{bm.name}: {bm.width}x{bm.height} -> {args.output}")


def cmd_sound(args):
    pig = _open(args.input)
    idx = pig.find_sound_index_by_name(args.name)
    if idx is None:
        print(f"no sound named {args.name!r}", file=sys.stderr)
        return 1
    pcm = pig.get_sound_pcm(idx)
    if args.wav:
        with wave.open(args.output, "wb") as wav:
            wav.setnchannels(1)
            wav.setsampwidth(1)
            wav.setframerate(SOUND_SAMPLE_RATE)
            wav.writeframes(pcm)
    else:
        Path(args.output).write_bytes(pcm)
    print(f"{pig.sound(idx).name}: {len(pcm)} samples -> {args.output}")


def cmd_palette(args):
    from .binary.codecs.palette_codec import load_palette
    from .resources import MappingResources
    src = Path(args.input)
    res = MappingResources.from_paths([src])
    Path(args.output).write_bytes(load_palette(res, candidates=(src.name,)))


def cmd_plot(args):
    from .viz import show_bitmap, plot_sound
    pig = _open(args.input)
    if args.bitmap:
        idx = pig.find_bitmap_index_by_name(args.bitmap)
        if idx is None:
            print(f"no bitmap named {args.bitmap!r}", file=sys.stderr)
            return 1
        show_bitmap(pig, idx)
    else:
        idx = pig.find_sound_index_by_name(args.sound)
        if idx is None:
            print(f"no sound named {args.sound!r}", file=sys.stderr)
            return 1
        plot_sound(pig, idx)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="pigfile", description="PIG bitmap/sound archive utilities")
    p.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = p.add_subparsers(dest="cmd", required=True)

    sp = sub.add_parser("info", help="print the archive directory as JSON")
    sp.add_argument("input", help="Path to .pig file")
    sp.add_argument("--bitmaps", action="store_true", help="List every bitmap entry")
    sp.add_argument("--sounds", action="store_true", help="List every sound entry")
    sp.set_defaults(func=cmd_info)

    sp = sub.add_parser("bitmap", help="write a bitmap's decoded palette indices")
    sp.add_argument("input")
    sp.add_argument("name")
    sp.add_argument("-o", "--output", required=True)
    sp.set_defaults(func=cmd_bitmap)

    sp = sub.add_parser("sound", help="write a sound's decoded 8-bit PCM")
    sp.add_argument("input")
    sp.add_argument("name")
    sp.add_argument("-o", "--output", required=True)
    sp.add_argument("--wav", action="store_true", help="Wrap the samples in an 11025 Hz WAV file")
    sp.set_defaults(func=cmd_sound)

    sp = sub.add_parser("palette", help="convert a 6-bit VGA palette to 8-bit RGB")
    sp.add_argument("input")
    sp.add_argument("-o", "--output", required=True)
    sp.set_defaults(func=cmd_palette)

    sp = sub.add_parser("plot", help="sanity plot of one bitmap or sound")
    sp.add_argument("input")
    grp = sp.add_mutually_exclusive_group(required=True)
    grp.add_argument("--bitmap")
    grp.add_argument("--sound")
    sp.set_defaults(func=cmd_plot)

    return p


def main(argv=None):
    ns = build_parser().parse_args(argv)
    logging.basicConfig(level=ns.log_level, format="%(levelname)s %(name)s: %(message)s")
    try:
        return ns.func(ns)
    except FormatError as e:
        print(f"{ns.input}: {type(e).__name__}: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
