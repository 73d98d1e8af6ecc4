from __future__ import annotations
import argparse
import logging
import os
from typing import List, Optional

from .catalog import FilterVariant, ParamKey, all_variants
from .errors import InstafilterError, UnknownFilterError
from .helpers import EditorConfig, SaveConfig, list_images
from .library import ImagePicker, ImageSaver
from .normalize import NormalizedControls
from .session import EditingSession, load_image, save
from .viz import Visualizer


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="instafilter", description="Apply a photo filter and save the result")
    g_io = p.add_argument_group("I/O")
    g_io.add_argument("--image", type=str, help="Path to a single image")
    g_io.add_argument("--dir", type=str, help="Path to a directory of images")
    g_io.add_argument("--library", type=str, default=None, help="Photo library folder to save results into")
    g_io.add_argument("--format", type=str, default=".png", help="Saved image format (extension)")
    g_io.add_argument("--show", action="store_true", help="Display before/after preview")

    g_flt = p.add_argument_group("Filter")
    g_flt.add_argument("--filter", type=str, default=FilterVariant.SEPIA_TONE.display_name,
                       help="Filter name, e.g. 'Sepia Tone' or gaussian-blur")
    g_flt.add_argument("--intensity", type=float, default=0.5, help="Normalized control in [0, 1]")
    g_flt.add_argument("--radius", type=float, default=None, help="Normalized radius (defaults to --intensity)")
    g_flt.add_argument("--scale", type=float, default=None, help="Normalized scale (defaults to --intensity)")
    g_flt.add_argument("--list", action="store_true", help="List available filters and exit")

    p.add_argument("-v", "--verbose", action="store_true")
    return p


def controls_from_args(args: argparse.Namespace) -> NormalizedControls:
    for name in ("intensity", "radius", "scale"):
        value = getattr(args, name)
        if value is not None and not 0.0 <= value <= 1.0:
            raise ValueError(f"--{name} must be within [0, 1], got {value}")
    controls = NormalizedControls.uniform(args.intensity)
    if args.radius is not None:
        controls = controls.with_value(ParamKey.RADIUS, args.radius)
    if args.scale is not None:
        controls = controls.with_value(ParamKey.SCALE, args.scale)
    return controls


def config_from_args(args: argparse.Namespace) -> EditorConfig:
    return EditorConfig(
        default_filter=FilterVariant.from_name(args.filter),
        default_controls=controls_from_args(args),
        library_dir=args.library,
        show=args.show,
        save=SaveConfig(extension=args.format),
    )


def _print_catalog() -> None:
    for variant in all_variants():
        keys = ", ".join(sorted(k.value for k in variant.accepted_keys))
        print(f"{variant.display_name:<14} {keys}")


def _process_one(path: str, cfg: EditorConfig, picker: ImagePicker,
                 saver: Optional[ImageSaver], viz: Visualizer) -> EditingSession:
    session = EditingSession(variant=cfg.default_filter, controls=cfg.default_controls)
    session = load_image(session, picker.pick_image(path), path=path)

    if cfg.show:
        viz.show_before_after(session.source, session.result, title=session.variant.display_name)

    if saver is not None:
        save(session, saver)
    return session


def main(argv: Optional[List[str]] = None) -> int:
    args = build_argparser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.list:
        _print_catalog()
        return 0

    try:
        cfg = config_from_args(args)
    except (UnknownFilterError, ValueError) as e:
        print(e)
        return 2

    if args.image:
        paths = [args.image]
    elif args.dir:
        try:
            paths = list_images(args.dir)
        except OSError as e:
            print(e)
            return 2
        if not paths:
            print(f"No images found in {args.dir}")
            return 0
    else:
        raise SystemExit("Provide either --image or --dir")

    saver = None
    if cfg.library_dir:
        saver = ImageSaver(cfg.library_dir, cfg.save,
                           success_handler=lambda _path: print("Success!"))

    picker = ImagePicker(os.path.dirname(paths[0]) if paths else None)
    viz = Visualizer()

    status = 0
    for path in paths:
        try:
            _process_one(path, cfg, picker, saver, viz)
        except (InstafilterError, FileNotFoundError) as e:
            print(f"{os.path.basename(path)}: {e}")
            status = 1
    return status


if __name__ == "__main__":
    raise SystemExit(main())
