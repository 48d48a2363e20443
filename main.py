import argparse
import json
import sys
from pathlib import Path

from src.core.errors import FlowDetectionError, UnknownFlowTypeError
from src.core.models import FlowContext
from src.core.reprocessor import OUTPUT_MODES, reprocess_listings
from src.core.steps import get_step_definition, get_step_key
from src.flows.factory import FlowServiceFactory
from src.logger_setup import get_logger

logger = get_logger(__name__)


def normalize_file(
    path: str,
    url_path: str = "",
    ad_type: str | None = None,
    flow_type: str | None = None,
) -> dict:
    """Normalize a JSON dump of wizard form state into the persisted document."""
    with open(path, "r", encoding="utf-8") as file:
        form_data = json.load(file)

    if flow_type:
        service = FlowServiceFactory.get_flow_service_by_type(flow_type)
    else:
        context = FlowContext(url_path=url_path, ad_type=ad_type)
        service = FlowServiceFactory.get_flow_service(form_data, context)

    return service.format_data(form_data).to_document()


def describe_steps(flow_type: str) -> list[dict]:
    service = FlowServiceFactory.get_flow_service_by_type(flow_type)
    return [
        {
            "id": step_id,
            "title": get_step_definition(step_id).title,
            "step_key": get_step_key(service.flow_type, step_id),
        }
        for step_id in service.get_steps()
    ]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Classify and normalize property listing wizard data.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    normalize_parser = subparsers.add_parser("normalize", help="Normalize a JSON file of form data")
    normalize_parser.add_argument("input", type=str, help="Path to the form data JSON file")
    normalize_parser.add_argument("--url-path", type=str, default="", help="Wizard URL the data came from")
    normalize_parser.add_argument("--ad-type", type=str, default=None, help="Ad type hint, e.g. 'pghostel'")
    normalize_parser.add_argument("--flow-type", type=str, default=None, help="Skip detection and use this flow")
    normalize_parser.add_argument("--output", type=str, default=None, help="Write the document here instead of stdout")

    steps_parser = subparsers.add_parser("steps", help="Show the wizard steps of a flow")
    steps_parser.add_argument("flow_type", type=str, help="Flow type, e.g. 'residential_rent'")

    reprocess_parser = subparsers.add_parser("reprocess", help="Re-normalize exported listings")
    reprocess_parser.add_argument("path", type=str, help="CSV export or folder of exports")
    reprocess_parser.add_argument(
        "--output-mode",
        type=str,
        choices=OUTPUT_MODES,
        default="overwrite",
        help="Replace files or write timestamped copies (default: %(default)s)",
    )
    reprocess_parser.add_argument("--output-dir", type=str, default=None, help="Output folder for CSV files")

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.command == "normalize":
        try:
            document = normalize_file(args.input, args.url_path, args.ad_type, args.flow_type)
        except (FlowDetectionError, UnknownFlowTypeError) as e:
            logger.error(str(e))
            return 1

        output = json.dumps(document, indent=2, ensure_ascii=False)
        if args.output:
            Path(args.output).write_text(output, encoding="utf-8")
            logger.info(f"Saved {document['flow']['flowType']} document to {args.output}")
        else:
            print(output)
        return 0

    if args.command == "steps":
        try:
            steps = describe_steps(args.flow_type)
        except UnknownFlowTypeError as e:
            logger.error(str(e))
            return 1
        for number, step in enumerate(steps, start=1):
            print(f"{number}. {step['id']:<18} {step['title']:<20} {step['step_key'] or '-'}")
        return 0

    output_files = reprocess_listings(args.path, args.output_mode, args.output_dir)
    logger.info(f"Reprocessed {len(output_files)} files")
    return 0 if output_files else 1


if __name__ == "__main__":
    sys.exit(main())
