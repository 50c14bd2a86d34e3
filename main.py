import argparse
import logging
import os
import sys
from pathlib import Path
from dotenv import load_dotenv
from batch_processor.batch_processor_v1_0 import run_batch_processor
from image_codec.image_codec_v1_0 import DecodeError, EncodeError
from sprite_pipeline.sprite_pipeline_v1_0 import CollisionError, ValidationError, run_single_file

load_dotenv()

def setup_logging(level_name=None):
    """Setup logging configuration."""
    level_name = (level_name or os.environ.get('SPRITE_NORMALIZER_LOG_LEVEL', 'INFO')).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise ValidationError(f"Unknown log level: {level_name}")
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler()]
    )

def load_worker_count(cli_workers):
    if cli_workers is not None:
        workers = cli_workers
    else:
        raw = os.environ.get('SPRITE_NORMALIZER_WORKERS')
        if not raw:
            return None
        try:
            workers = int(raw)
        except ValueError:
            raise ValidationError(f"SPRITE_NORMALIZER_WORKERS must be an integer, got '{raw}'")
    if workers < 1:
        raise ValidationError(f"Worker count must be at least 1, got {workers}")
    return workers

def build_parser():
    parser = argparse.ArgumentParser(
        description="Trim transparent borders from sprites and pad them to dimensions divisible by 4"
    )
    parser.add_argument('--input', '-i', required=True, help='Path to a single image or a directory of images')
    parser.add_argument('--output', '-o', required=True,
                        help='Output file if the input is a file, output directory if the input is a directory')
    parser.add_argument('--force', '-f', action='store_true', help='Overwrite existing files at the output path')
    parser.add_argument('--downsize', '-d', action='store_true', help='Downsize sprites to --max-size before padding')
    parser.add_argument('--max-size', '-m', type=int, default=None,
                        help='Longest edge allowed before padding (required with --downsize)')
    parser.add_argument('--workers', '-w', type=int, default=None,
                        help='Number of worker threads in directory mode (default: CPU count)')
    parser.add_argument('--progress', action='store_true', help='Show a progress bar in directory mode')
    return parser

def main(argv=None):
    args = build_parser().parse_args(argv)
    logger = logging.getLogger("sprite_normalizer")

    try:
        setup_logging()
        if Path(args.input).is_dir():
            run_batch_processor(
                input_dir=args.input,
                output_dir=args.output,
                force=args.force,
                downsize=args.downsize,
                max_size=args.max_size,
                max_workers=load_worker_count(args.workers),
                logger=logger,
                show_progress=args.progress
            )
        else:
            run_single_file(
                input_path=args.input,
                output_path=args.output,
                force=args.force,
                downsize=args.downsize,
                max_size=args.max_size,
                logger=logger
            )
    except (ValidationError, CollisionError, DecodeError, EncodeError) as e:
        logger.error(str(e))
        return 1

    return 0

if __name__ == "__main__":
    sys.exit(main())
