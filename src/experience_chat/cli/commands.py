"""
CLI commands - a terminal front-end for the experience chatbot.

Each command follows a consistent pattern:
1. Parse arguments
2. Load environment and build config
3. Run the session or eval
4. Print results
5. Return exit code

The commands only parse arguments and print output. Loading, search and
answer synthesis all live in the chat and search modules.
"""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import logging
import sys

from dotenv import load_dotenv

from experience_chat.config import EMBEDDING_BACKENDS, ChatConfig
from experience_chat.observability.tracing import init_tracing, shutdown_tracing


def _load_env() -> None:
    """Load environment variables from .env file."""
    load_dotenv()


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--kb", dest="kb_path", help="Knowledge base JSON file or URL")
    parser.add_argument("--top-k", type=int, help="Results per answer")
    parser.add_argument("--min-score", type=float, help="Similarity floor for results")
    parser.add_argument("--backend", choices=EMBEDDING_BACKENDS, help="Embedding backend")


def _config_from_args(args: argparse.Namespace) -> ChatConfig:
    """Environment config with any command-line overrides applied."""
    overrides = {
        "kb_path": args.kb_path,
        "top_k": args.top_k,
        "min_score": args.min_score,
        "embedding_backend": args.backend,
    }
    config = ChatConfig.from_env()
    return dataclasses.replace(config, **{k: v for k, v in overrides.items() if v is not None})


def _setup(config: ChatConfig) -> None:
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    init_tracing(config)


def _print_system_messages(messages) -> None:
    for message in messages:
        if message.role == "system":
            print(f"[system] {message.text}")


async def _ask(config: ChatConfig, question: str, wait_for_model: bool) -> int:
    from experience_chat.chat.session import ChatSession

    session = ChatSession(config)
    if not await session.start():
        _print_system_messages(session.transcript)
        return 1

    if wait_for_model:
        await session.wait_for_model()

    reply = await session.ask(question)
    if reply is None:
        print("Please ask a question.")
        return 2

    print(reply.text)
    return 0


def run_ask_cli() -> int:
    """CLI entry point for a single question."""
    parser = argparse.ArgumentParser(description="Ask the experience chatbot one question")
    parser.add_argument("question", nargs="+", help="Free-text question")
    parser.add_argument(
        "--wait-for-model",
        action="store_true",
        help="Wait for the embedding model before answering",
    )
    _add_common_args(parser)
    args = parser.parse_args()

    try:
        config = _config_from_args(args)
    except ValueError as e:
        print(f"Error: {e}")
        return 2
    _setup(config)
    return asyncio.run(_ask(config, " ".join(args.question), args.wait_for_model))


async def _chat(config: ChatConfig) -> int:
    from experience_chat.chat.session import ChatSession

    session = ChatSession(config)
    started = await session.start()
    shown = len(session.transcript)
    _print_system_messages(session.transcript)
    if not started:
        return 1

    print("Ask about my experience. Empty line or Ctrl-D to quit.")
    while True:
        try:
            line = await asyncio.to_thread(input, "you> ")
        except EOFError:
            break
        if not line.strip():
            break

        await session.ask(line)
        for message in session.transcript[shown:]:
            if message.role == "bot":
                print(f"bot> {message.text}")
            elif message.role == "system":
                print(f"[system] {message.text}")
        shown = len(session.transcript)

    return 0


def run_chat_cli() -> int:
    """CLI entry point for the interactive chat."""
    parser = argparse.ArgumentParser(description="Chat with the experience bot")
    _add_common_args(parser)
    args = parser.parse_args()

    try:
        config = _config_from_args(args)
    except ValueError as e:
        print(f"Error: {e}")
        return 2
    _setup(config)
    return asyncio.run(_chat(config))


async def _eval(config: ChatConfig, threshold: float):
    from experience_chat.embeddings.services import get_embedding_service
    from experience_chat.evals.retrieval_eval import evaluate_retrieval
    from experience_chat.knowledge.loader import aload_knowledge_base
    from experience_chat.knowledge.seeds import get_experience_documents
    from experience_chat.search.orchestrator import SearchOrchestrator

    if config.kb_path:
        corpus = await aload_knowledge_base(config.kb_path, config.fetch_timeout)
    else:
        corpus = get_experience_documents()

    orchestrator = SearchOrchestrator.from_corpus(corpus, config)
    if config.model_enabled:
        await orchestrator.build_model_index(
            lambda: get_embedding_service(config.embedding_backend, config.embedding_model)
        )
        print(f"Model index: {orchestrator.model_status.value}")

    # Golden queries only describe the packaged corpus
    cases = [] if config.kb_path else None
    return await evaluate_retrieval(orchestrator, cases=cases, threshold=threshold)


def run_eval_cli() -> int:
    """CLI entry point for the retrieval quality eval."""
    from experience_chat.evals.retrieval_eval import DEFAULT_THRESHOLD
    from experience_chat.knowledge.loader import KnowledgeBaseError

    parser = argparse.ArgumentParser(description="Run retrieval quality eval")
    parser.add_argument(
        "--threshold",
        type=float,
        default=DEFAULT_THRESHOLD,
        help=f"Minimum recall per golden query (default: {DEFAULT_THRESHOLD})",
    )
    parser.add_argument("--quiet", action="store_true", help="Minimal output")
    _add_common_args(parser)
    args = parser.parse_args()

    try:
        config = _config_from_args(args)
    except ValueError as e:
        print(f"Error: {e}")
        return 2
    _setup(config)

    print("=" * 60)
    print("RETRIEVAL QUALITY EVAL")
    print("=" * 60)

    try:
        report = asyncio.run(_eval(config, args.threshold))
    except KnowledgeBaseError as e:
        print(f"Error: {e}")
        return 1

    if not args.quiet:
        for result in report.results:
            status = "PASS" if result.passed else "FAIL"
            m = result.metrics
            print(f"  [{status}] {result.case_id}: {result.query}")
            print(f"        Recall: {m.recall:.2f} | Precision: {m.precision:.2f} | RR: {m.reciprocal_rank:.2f}")
            if m.missing:
                print(f"        Missing: {m.missing}")
        for title in report.self_retrieval_misses:
            print(f"  [FAIL] self-retrieval: {title}")

    print(f"\nAverage recall: {report.avg_recall:.2f} | MRR: {report.mean_reciprocal_rank:.2f}")
    print(f"Threshold: {report.threshold}")
    print(f"Passed: {report.passed_cases}/{report.total_cases}")
    print(f"Self-retrieval misses: {len(report.self_retrieval_misses)}")

    if report.all_passed:
        print("\n>>> RETRIEVAL EVAL GATE: PASSED <<<")
        return 0
    else:
        print("\n>>> RETRIEVAL EVAL GATE: FAILED <<<")
        return 1


def main() -> int:
    """
    Main CLI entry point with subcommands.

    Usage:
        experience-chat ask "Have you worked with LLMs?"
        experience-chat chat
        experience-chat eval
    """
    _load_env()

    parser = argparse.ArgumentParser(
        description="Experience chatbot",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  ask     Answer a single question and exit
  chat    Interactive chat in the terminal
  eval    Run the retrieval quality eval

Examples:
  experience-chat ask "pricing experience?"
  experience-chat chat --kb ./kb.json
  experience-chat eval --top-k 5
        """,
    )

    parser.add_argument(
        "command",
        choices=["ask", "chat", "eval"],
        help="Command to run",
    )

    # Parse just the command first
    args, remaining = parser.parse_known_args()

    commands = {
        "ask": run_ask_cli,
        "chat": run_chat_cli,
        "eval": run_eval_cli,
    }

    # Re-inject remaining args for the subcommand
    sys.argv = [sys.argv[0]] + remaining

    try:
        return commands[args.command]()
    except KeyboardInterrupt:
        print("\nInterrupted")
        return 130
    finally:
        shutdown_tracing()


if __name__ == "__main__":
    sys.exit(main())
