"""
Convert topic-model dump files into result bundles.

Usage:
    topicdump state <state-file> <out-dir> [--doc-topics=<file>]
                    [--no-terms] [--no-docs] [--no-topic-terms]
                    [--no-doc-topics] [-v]
    topicdump counts <counts-file> <topics> <out-dir> [-v]

Arguments:
    <state-file>    token assignment dump, plain or gzipped
    <counts-file>   word-topic-counts dump, plain or gzipped
    <topics>        number of topics in the model
    <out-dir>       directory to write the bundle to

Options:
    --doc-topics=<file>  stream document-topic rows to <file> (.gz compresses)
    --no-terms           skip terms and term frequencies
    --no-docs            skip document names and lengths
    --no-topic-terms     skip the topic-term matrix
    --no-doc-topics      skip the in-memory document-topic matrix
    -v, --verbose        log progress every 100,000 lines
    -h, --help           show help
"""

from __future__ import annotations

import logging
import sys

from docopt import docopt

from ._aggregator import parse_state
from ._counts import parse_word_topic_counts
from ._errors import TopicDumpError
from ._progress import log_progress
from ._store import save_counts, save_result
from ._types import ParseOptions

logger = logging.getLogger("topicdump")


def _run(args: dict) -> None:
    progress = log_progress if args["--verbose"] else None

    if args["state"]:
        options = ParseOptions(
            extract_terms=not args["--no-terms"],
            extract_documents=not args["--no-docs"],
            extract_topic_terms=not args["--no-topic-terms"],
            extract_doc_topics=not args["--no-doc-topics"],
            doc_topics_path=args["--doc-topics"],
        )
        result = parse_state(args["<state-file>"], options, progress=progress)
        manifest = save_result(result, args["<out-dir>"])
    else:
        try:
            topics = int(args["<topics>"])
        except ValueError:
            raise TopicDumpError(
                f"<topics> must be an integer, got {args['<topics>']!r}"
            ) from None
        counts = parse_word_topic_counts(
            args["<counts-file>"], topics, progress=progress
        )
        manifest = save_counts(counts, args["<out-dir>"])
    logger.info("wrote %s", manifest)


def main(argv: list[str] | None = None) -> int:
    args = docopt(__doc__, argv=argv)
    logging.basicConfig(
        level=logging.INFO if args["--verbose"] else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        _run(args)
    except (TopicDumpError, OSError, ValueError) as e:
        print(f"topicdump: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
