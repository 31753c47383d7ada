import os
import sys

from dotenv import load_dotenv

# Import the necessary components
from data_assistant.clients.google import GoogleClient
from data_assistant.ingestion import load_csv
from data_assistant.analysis import render_report
from data_assistant.session import DataSession

# Load environment variables (API keys)
load_dotenv()


def main():
    if len(sys.argv) < 2:
        print("Usage: python programmatic_usage.py FILE.csv")
        return

    # 1. Initialize the LLM Client
    api_key = os.getenv("GOOGLE_API_KEY") or os.getenv("GEMINI_API_KEY")
    if not api_key:
        print("Please set GOOGLE_API_KEY in .env")
        return

    client = GoogleClient(api_key=api_key, model="gemini-2.5-flash")

    # Example: Using OpenAI instead
    # from data_assistant.clients.openai import OpenAIClient
    # client = OpenAIClient(model="gpt-4o")

    # 2. Create a session and load a dataset
    session = DataSession(client, batch_size=50)
    session.load(load_csv(sys.argv[1]), name=os.path.basename(sys.argv[1]))
    print(render_report(session.report))

    # 3. Ask the agent to work on the data
    result = session.send_message("Summarize the first column, then flag rows where it is missing.")
    if result.is_completed:
        print(f"Assistant: {result.content}")
        for step in result.steps:
            print(f"  [{step.kind.value}] {step.content}")
    else:
        print(f"Error: {session.error}")

    # 4. Categorize a column in batches and save the result
    column = session.dataset.headers[0]
    if session.categorize(column) is not None:
        with open("categorized.csv", "wb") as f:
            f.write(session.export())
        print("Wrote categorized.csv")
    else:
        print(f"Error: {session.error}")


if __name__ == "__main__":
    main()
