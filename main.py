# main.py
"""
Command line front end for the optical form reader.

    python main.py key answer_key.jpg       # read and save the answer key
    python main.py submit filled_form.jpg   # read and save a submitted form
    python main.py compare --details        # score the submission against the key
"""
import sys
import logging
import argparse

import cv2

from form_reader import (
    config,
    image_processing,
    annotator,
    pipeline,
    scorer,
)
from form_reader.errors import FormReaderError, StorageUnavailable
from form_reader.result_store import ResultStore

logger = logging.getLogger(__name__)


def setup_logging(verbose=False):
    """Configures the logging system to output to the console."""
    # This check prevents adding handlers multiple times if the function is called again
    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.INFO,
            format='%(asctime)s - %(levelname)s - %(message)s',
        )


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Read multiple-choice answers from a photographed form")
    parser.add_argument("--data-dir", default=config.DATA_DIR,
                        help="Directory holding the answer key and submission files")
    parser.add_argument("--preset", choices=sorted(config.PRESETS), default=config.DEFAULT_PRESET,
                        help="Detection and classification strategy")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debugging details")

    commands = parser.add_subparsers(dest="command", required=True)
    for command, help_text in (("key", "Capture the answer key"), ("submit", "Capture a submitted form")):
        sub = commands.add_parser(command, help=help_text)
        sub.add_argument("image", help="Path to the form image")
        sub.add_argument("--annotated", default=None, help="Save the annotated image to this path")
        sub.add_argument("--diagnostics", nargs="?", const=config.DIAGNOSTICS_DIR, default=None,
                         help="Save intermediate preprocessing images to this directory")
        sub.add_argument("--numbered", action="store_true", help="Write question numbers on the annotated image")

    compare = commands.add_parser("compare", help="Score the submission against the answer key")
    compare.add_argument("--details", action="store_true", help="Print the per-question report")
    return parser.parse_args(argv)


def capture_form(args, name):
    """Executes the full reading workflow for one form image."""
    image = image_processing.load_image(args.image)
    store = ResultStore(args.data_dir)
    result = pipeline.capture(image, name, store, config.get_preset(args.preset), numbered=args.numbered)

    if args.annotated:
        try:
            written = cv2.imwrite(args.annotated, result.annotated)
        except cv2.error as e:
            raise StorageUnavailable(f"Could not write annotated image to {args.annotated}: {e}") from e
        if not written:
            raise StorageUnavailable(f"Could not write annotated image to {args.annotated}")
        logger.info("Saved annotated image to %s", args.annotated)
    if args.diagnostics:
        annotator.save_diagnostics(result.stages, args.diagnostics)

    print(f"Saved {len(result.answers)} answers to {store.path_for(name)}")
    return result


def compare_answers(args):
    store = ResultStore(args.data_dir)
    key = store.read(config.ANSWER_KEY_NAME)
    submitted = store.read(config.SUBMISSION_NAME)
    tally = scorer.compare(key, submitted)

    if args.details and key:
        print(scorer.grade_report(key, submitted).to_string(index=False))
    print(f"Correct: {tally.correct}, Incorrect: {tally.incorrect}, Blank: {tally.blank}")
    return tally


def main(argv=None):
    """Main function to dispatch the chosen command. Returns the exit status."""
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        if args.command == "key":
            capture_form(args, config.ANSWER_KEY_NAME)
        elif args.command == "submit":
            capture_form(args, config.SUBMISSION_NAME)
        else:
            compare_answers(args)
    except FormReaderError as e:
        logger.error("%s failed: %s", args.command, e)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
