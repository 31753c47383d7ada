"""Main entry point for the data assistant CLI.

Loads a CSV file, sets up the provider and runs the interactive loop.
"""

import argparse
import sys
from pathlib import Path

import yaml

from .analysis import render_report
from .categorization import results_to_dataset
from .clients.factory import create_client, get_available_providers
from .config import get_settings
from .exceptions import (
    AgentError,
    AuthenticationError,
    DataError,
    ProviderUnavailableError,
    RateLimitError,
)
from .ingestion import export_csv, load_csv, modified_filename
from .logging import setup_logging
from .session import DataSession
from .types import StepKind

DOWNLOAD_FLAG = "--download"

HELP_TEXT = """Commands:
  /profile                 show the dataset profile
  /summary COLUMN          show statistics for one column
  /categorize COLUMN [N]   categorize a column in batches of N
      [--download [PATH]]  write the results to their own CSV instead of merging
  /revert                  restore the dataset as loaded
  /export [PATH]           write the dataset as CSV
  /clear                   clear the conversation
  /steps                   show the trace of the last answer
  exit                     quit
Anything else is sent to the assistant."""


def load_yaml_config() -> dict:
    """Load configuration from config.yaml if it exists."""
    try:
        with open("config.yaml", "r") as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        return {}


def get_provider_and_model(args: argparse.Namespace, yaml_config: dict) -> tuple[str | None, str | None]:
    """Determine the provider and model to use.

    Priority order:
    1. CLI arguments
    2. Config file (config.yaml)
    3. Environment variables (via pydantic settings)
    4. Auto-detection based on available API keys
    """
    settings = get_settings()
    llm_config = yaml_config.get("llm", {})

    provider = args.provider or llm_config.get("provider") or settings.detect_provider()
    model = args.model or llm_config.get("model") or settings.llm_model

    return provider, model


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Data Assistant CLI")
    parser.add_argument(
        "file",
        help="CSV file to load"
    )
    parser.add_argument(
        "--provider",
        choices=get_available_providers(),
        help="LLM provider to use (overrides config and auto-detection)"
    )
    parser.add_argument(
        "--model",
        help="LLM model to use (overrides config)"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (also settable via DATA_ASSISTANT_LOG_LEVEL env var)"
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        help="Rows per categorization request (default from settings)"
    )
    return parser


def main():
    """Main entry point for the data assistant CLI."""
    args = build_parser().parse_args()

    # setup logging early
    setup_logging(args.log_level or get_settings().log_level)

    yaml_config = load_yaml_config()
    provider, model = get_provider_and_model(args, yaml_config)

    if not provider:
        print("Error: No LLM provider specified and no API keys found.")
        print("Please set one of the following:")
        print("  - LLM_PROVIDER environment variable")
        print("  - provider in config.yaml")
        print("  - GOOGLE_API_KEY, GEMINI_API_KEY or OPENAI_API_KEY")
        sys.exit(1)

    print(f"Using provider: {provider}")
    if model:
        print(f"Using model: {model}")

    settings = get_settings()
    try:
        llm_config = yaml_config.get("llm", {})
        client_config = {
            k: v for k, v in llm_config.items()
            if k not in ["provider", "model"]
        }
        client = create_client(
            provider,
            model,
            client_config,
            api_key=settings.get_api_key_for_provider(provider),
        )
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    try:
        dataset = load_csv(args.file)
    except (OSError, UnicodeDecodeError, ValueError) as e:
        print(f"Error: could not load {args.file}: {e}")
        sys.exit(1)

    session = DataSession(
        client,
        max_rounds=settings.max_agent_rounds,
        batch_size=args.batch_size or settings.categorization_batch_size,
    )
    session.load(dataset, name=Path(args.file).name)
    run_repl(session)


def _print_last_message(session: DataSession) -> None:
    if session.messages and session.messages[-1].content:
        print(f"\nAssistant: {session.messages[-1].content}")


def _print_steps(session: DataSession) -> None:
    for message in reversed(session.messages):
        if message.execution_steps:
            for step in message.execution_steps:
                label = step.kind.value
                if step.kind == StepKind.FINAL_ANSWER:
                    label = label.upper()
                print(f"  [{label}] {step.content}")
            return
    print("No execution steps yet.")


def _categorize(session: DataSession, arg: str) -> None:
    """Handle ``/categorize COLUMN [N] [--download [PATH]]``.

    Without ``--download`` the category columns are merged into the dataset.
    With it the dataset is left alone and the results are written to their
    own CSV, ``<stem>_categorized.csv`` unless PATH is given.
    """
    arg, download, path = arg.partition(DOWNLOAD_FLAG)
    arg = arg.strip()
    column, _, batch = arg.rpartition(" ")
    if not column or not batch.isdigit():
        column, batch = arg, ""
    if not column:
        print(f"Usage: /categorize COLUMN [BATCH_SIZE] [{DOWNLOAD_FLAG} [PATH]]")
        return
    batch_size = int(batch) if batch else None

    if not download:
        dataset = session.categorize(column, batch_size)
        if dataset is not None:
            print(f"Categorized '{column}'. Columns: {', '.join(dataset.headers)}")
        return

    results = session.categorize_to_records(column, batch_size)
    if results is None:
        return
    target = Path(
        path.strip()
        or modified_filename(session.workspace.name or "data.csv", "_categorized")
    )
    target.write_bytes(export_csv(results_to_dataset(results)))
    print(f"Wrote {len(results)} categorized values to {target}")


def handle_command(session: DataSession, command: str) -> None:
    """Run one slash command against the session."""
    name, _, rest = command.partition(" ")
    arg = rest.strip()

    if name == "/profile":
        print(render_report(session.report))
    elif name == "/summary":
        if not arg:
            print("Usage: /summary COLUMN")
            return
        for key, value in session.summarize(arg).to_payload().items():
            print(f"  {key}: {value}")
    elif name == "/categorize":
        _categorize(session, arg)
    elif name == "/revert":
        session.revert()
        _print_last_message(session)
    elif name == "/export":
        path = Path(arg or modified_filename(session.workspace.name or "data.csv"))
        path.write_bytes(session.export())
        print(f"Wrote {len(session.dataset)} rows to {path}")
    elif name == "/clear":
        session.clear_chat()
        _print_last_message(session)
    elif name == "/steps":
        _print_steps(session)
    else:
        print(HELP_TEXT)


def run_repl(session: DataSession) -> None:
    """Run the interactive REPL loop."""
    print(f"Loaded {session.workspace.name}: {len(session.dataset)} rows, "
          f"{len(session.dataset.headers)} columns. Type /help for commands, 'exit' to quit.")
    print("-" * 50)
    _print_last_message(session)

    while True:
        try:
            user_input = input("You: ")
        except (KeyboardInterrupt, EOFError):
            print("\nGoodbye!")
            break

        if user_input.lower() in ("exit", "quit"):
            print("Goodbye!")
            break

        if not user_input.strip():
            continue

        try:
            if user_input.startswith("/"):
                handle_command(session, user_input.strip())
            else:
                result = session.send_message(user_input)
                if result.is_completed:
                    print(f"\nAssistant: {result.content}")
                else:
                    _print_last_message(session)

            if session.error:
                print(f"Error: {session.error}")
                session.dismiss_error()

        except AuthenticationError as e:
            print(f"Authentication error: {e}")
            print("Please check your API key.")
        except RateLimitError as e:
            print(f"Rate limit exceeded: {e}")
            print("Please wait a moment and try again.")
        except ProviderUnavailableError as e:
            print(f"Provider unavailable: {e}")
            print("Please try again later.")
        except DataError as e:
            print(f"Error: {e}")
        except AgentError as e:
            print(f"Agent error: {e}")
        except OSError as e:
            print(f"Error: {e}")
        except Exception as e:
            print(f"Unexpected error: {type(e).__name__}: {e}")


if __name__ == "__main__":
    main()
