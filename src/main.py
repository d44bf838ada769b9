"""Entry point: search, call, tools."""

import argparse
import asyncio
import sys


def _domains(value: str) -> list[str]:
    return [d.strip() for d in value.split(",") if d.strip()]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="python -m src.main")
    sub = parser.add_subparsers(dest="mode", required=True)

    search = sub.add_parser("search", help="Run one web search and print the streamed result")
    search.add_argument("query", nargs="*", help="Query text; read from stdin when omitted")
    search.add_argument("--max", dest="max_results", type=int, default=None)
    search.add_argument("--depth", choices=["basic", "advanced"], default=None)
    search.add_argument("--include", type=_domains, default=[], help="Comma-separated domains")
    search.add_argument("--exclude", type=_domains, default=[], help="Comma-separated domains")
    search.add_argument("--json", action="store_true", help="Also print the conversation messages")

    call = sub.add_parser("call", help="Execute the JSON tool call in an agent reply read from stdin")
    call.add_argument("--json", action="store_true", help="Also print the raw tool output")

    sub.add_parser("tools", help="Print the tool descriptions and examples given to the agent")
    return parser


def main(argv: list[str] | None = None):
    args = build_parser().parse_args(argv)

    if args.mode == "search":
        from src.interfaces.oneshot import main as run_oneshot_main

        if args.query:
            query = " ".join(args.query).strip()
        else:
            query = sys.stdin.read().strip()
        sys.exit(
            run_oneshot_main(
                query=query,
                max_results=args.max_results,
                search_depth=args.depth,
                include_domains=args.include,
                exclude_domains=args.exclude,
                as_json=args.json,
            )
        )
    elif args.mode == "call":
        from src.interfaces.oneshot import run_tool_call

        sys.exit(asyncio.run(run_tool_call(sys.stdin.read(), as_json=args.json)))
    elif args.mode == "tools":
        from src.interfaces.oneshot import print_tools

        sys.exit(asyncio.run(print_tools()))


if __name__ == "__main__":
    main()
