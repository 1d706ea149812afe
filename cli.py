#!/usr/bin/env python3
"""
Command-line interface for FrameMapper framework comparisons.
"""

import argparse
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

from framemapper.actions import handle_generate_comparison
from framemapper.frameworks import SAMPLE_FRAMEWORKS, framework_label, is_known_spreadsheet
from framemapper.models import ActionState, FrameworkKind
from framemapper.pipeline.comparison import create_pipeline

# Load environment variables
load_dotenv()


def print_state(state: ActionState):
    """Print an ActionState in human-readable form."""
    if state.error:
        print(f"❌ {state.error}")
        return

    result = state.data
    print(f"✅ {state.message}")
    for index, (name, side, image_url) in enumerate(
        [
            (result.name1, result.side1, result.image_url1),
            (result.name2, result.side2, result.image_url2),
        ],
        start=1,
    ):
        icon = "📊" if side.kind == FrameworkKind.SPREADSHEET else "💻"
        print("\n" + "=" * 60)
        print(f"{icon} {index}. {framework_label(name)} ({side.kind.value})")
        print("=" * 60)
        print(side.content)
        if image_url:
            print(f"🖼️  Image: generated ({len(image_url):,} chars)")

    print("\n" + "=" * 60)
    print("📝 Explanation")
    print("=" * 60)
    print(result.explanation)


def cmd_compare(args, pipeline=None):
    """Generate a comparison between two frameworks."""
    print("🚀 Generating comparison...")
    print(f"📘 Familiar: {framework_label(args.familiar)}")
    print(f"📗 Target: {framework_label(args.target)}")
    print(f"🧩 Component: {args.component}")

    if pipeline is None:
        pipeline = create_pipeline(
            provider=args.provider,
            model_name=args.model,
            temperature=args.temperature,
            enable_images=not args.no_images,
        )

    form_data = {
        "familiarFramework": args.familiar,
        "targetFramework": args.target,
        "componentToCompare": args.component,
    }
    state = handle_generate_comparison(ActionState(), form_data, pipeline)
    print_state(state)

    if args.output and state.data is not None:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(state.model_dump_json(indent=2), encoding="utf-8")
        print(f"\n💾 Saved to: {output_path}")

    return 0 if state.error is None else 1


def cmd_frameworks(args):
    """List the sample framework catalog."""
    if args.json:
        print(json.dumps(
            [{"value": value, "label": label} for value, label in SAMPLE_FRAMEWORKS],
            indent=2,
        ))
        return 0

    for value, label in SAMPLE_FRAMEWORKS:
        marker = "📊" if is_known_spreadsheet(value) else "💻"
        print(f"{marker} {value:<24} {label}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="FrameMapper: compare how two frameworks implement the same functionality",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Compare command
    compare_parser = subparsers.add_parser("compare", help="Generate a framework comparison")
    compare_parser.add_argument("--familiar", "-f", required=True, help="Framework you already know")
    compare_parser.add_argument("--target", "-t", required=True, help="Framework you want to learn")
    compare_parser.add_argument("--component", "-c", required=True, help="Component/functionality to compare")
    compare_parser.add_argument("--provider", "-p", choices=["openai", "anthropic"],
                                help="LLM provider (default: FRAMEMAPPER_PROVIDER or openai)")
    compare_parser.add_argument("--model", help="Model name (default: provider default)")
    compare_parser.add_argument("--temperature", type=float, help="Generation temperature")
    compare_parser.add_argument("--no-images", action="store_true", help="Skip spreadsheet image generation")
    compare_parser.add_argument("--output", "-o", help="Path to save the comparison JSON")

    # Frameworks command
    frameworks_parser = subparsers.add_parser("frameworks", help="List sample frameworks")
    frameworks_parser.add_argument("--json", action="store_true", help="Print as JSON")

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        if args.command == "compare":
            return cmd_compare(args)
        elif args.command == "frameworks":
            return cmd_frameworks(args)
    except KeyboardInterrupt:
        print("\n\n⚠️  Interrupted by user")
        return 130
    except Exception as e:
        print(f"\n❌ Error: {str(e)}")
        import traceback
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
