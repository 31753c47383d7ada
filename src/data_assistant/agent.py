"""Main agent implementation.

The DataAgent orchestrates conversations between the user, the LLM, and
the data tools. It uses unified types for all interactions, making it
provider-agnostic.
"""

from .clients.base import BaseLLMClient
from .core import MemoryManager, PromptBuilder, ToolExecutor
from .exceptions import AgentError, MaxRoundsExceededError
from .logging import get_logger
from .prompts import APOLOGY_MESSAGE, PLANNING_THOUGHT, SYSTEM_PROMPT
from .tools.base import BaseTool
from .types import (
    AgentRunResult,
    AgentState,
    ExecutionStep,
    StepKind,
    UnifiedMessage,
    UnifiedResponse,
)
from .workspace import Workspace

logger = get_logger(__name__)

DEFAULT_MAX_ROUNDS = 10


class DataAgent:
    """Agent that coordinates between the LLM and the data tools.

    The agent maintains conversation history and handles the tool-use loop:
    1. Send the history and current column headers to the LLM
    2. If the LLM requests tool calls, execute them in order
    3. Add the call batch and the result batch to history
    4. Repeat until the LLM produces a response without tool calls

    Each run records an execution trace (thoughts, tool calls, tool results
    and the final answer) which is attached to the closing assistant message.
    """

    def __init__(
        self,
        client: BaseLLMClient,
        tools: list[BaseTool],
        workspace: Workspace,
        system_prompt: str = SYSTEM_PROMPT,
        max_rounds: int = DEFAULT_MAX_ROUNDS,
    ):
        """Initialize the agent.

        Args:
            client: The LLM client to use (provider-agnostic)
            tools: List of tools available to the LLM
            workspace: Holder of the dataset the tools operate on
            system_prompt: System prompt template (``{tool_descriptions}`` is filled in)
            max_rounds: Maximum model calls per user turn
        """
        if max_rounds < 1:
            raise ValueError("max_rounds must be at least 1")

        self.client = client
        self.tool_list = tools
        self.workspace = workspace
        self.max_rounds = max_rounds
        self.state = AgentState.COMPLETED

        self.prompt_builder = PromptBuilder(system_prompt)
        self.tool_executor = ToolExecutor(
            tools={tool.name: tool for tool in tools},
            workspace=workspace,
        )
        self.memory = MemoryManager()

    @property
    def tools(self):
        return self.tool_executor.tools

    @property
    def history(self) -> list[UnifiedMessage]:
        return self.memory.history

    def run(self, user_input: str) -> AgentRunResult:
        """Run a conversation turn with the given user input.

        Model failures do not propagate as ClientError: the run ends in the
        ERROR state, and an apology is appended so the history stays
        well-formed.

        Args:
            user_input: The user's message

        Returns:
            AgentRunResult with the final answer or the error, plus the trace
        """
        self.memory.add_message(self.prompt_builder.build_user_message(user_input))

        steps: list[ExecutionStep] = []
        rounds = 0
        try:
            while True:
                if rounds >= self.max_rounds:
                    raise MaxRoundsExceededError(self.max_rounds)

                self.state = AgentState.AWAITING_MODEL
                message = self._request_model().message
                rounds += 1
                logger.debug(
                    f"round {rounds}: {len(message.tool_calls or [])} tool call(s)"
                )

                if not message.tool_calls:
                    break

                self.state = AgentState.EXECUTING_TOOLS
                steps.append(ExecutionStep(StepKind.THOUGHT, message.content or PLANNING_THOUGHT))
                results = self.tool_executor.execute_tool_calls(message.tool_calls, trace=steps)
                self.memory.add_tool_round(message.tool_calls, results, content=message.content)

        except AgentError as e:
            logger.error(f"agent run failed after {rounds} round(s): {e}")
            self.state = AgentState.ERROR
            self.memory.add_assistant_reply(APOLOGY_MESSAGE)
            return AgentRunResult(
                state=AgentState.ERROR,
                steps=steps,
                rounds=rounds,
                error=f"AI Assistant failed: {e}",
            )
        except Exception:
            self.state = AgentState.ERROR
            self.memory.add_assistant_reply(APOLOGY_MESSAGE)
            raise

        final_answer = message.content or ""
        steps.append(ExecutionStep(StepKind.FINAL_ANSWER, final_answer))
        self.memory.add_assistant_reply(final_answer, steps)
        self.state = AgentState.COMPLETED

        return AgentRunResult(
            state=AgentState.COMPLETED,
            content=final_answer,
            steps=steps,
            rounds=rounds,
        )

    def _request_model(self) -> UnifiedResponse:
        """One model call with the current headers in the system prompt."""
        system_prompt = self.prompt_builder.format_system_prompt(
            self.tool_list, self.client, self.workspace.headers
        )
        messages = [self.prompt_builder.build_system_message(system_prompt), *self.memory.history]
        return self.client.generate(
            messages=messages,
            tools=self.tool_list if self.tool_executor.tools else None,
        )

    def add_assistant_message(self, content: str) -> None:
        """Append a plain assistant message, e.g. a greeting after a load."""
        self.memory.add_assistant_reply(content)

    def clear_history(self) -> None:
        """Clear conversation history."""
        self.memory.clear(keep_system=False)

    def get_history(self) -> list[dict]:
        """Get conversation history as list of dicts."""
        return self.memory.get_history()
