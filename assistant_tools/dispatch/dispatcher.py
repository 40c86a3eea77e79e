"""Routes tool calls to the reminder store or the question forwarder.

A call is handled only when both its function name and its classified
argument shape match a routing entry; every other call gets the fixed
``UNKNOWN_FUNCTION_MESSAGE`` result and has no side effect. Calls are
processed one at a time in input order. A store or forwarder failure
propagates and aborts the whole batch.
"""
import logging
from typing import Awaitable, Callable, Dict, List, Optional, Sequence, Tuple

from fastapi.concurrency import run_in_threadpool

from assistant_tools.core.exceptions import ToolCallError
from assistant_tools.forwarder.client import QuestionForwarder
from assistant_tools.metrics import tool_calls_total
from assistant_tools.reminders.schemas import ReminderRead
from assistant_tools.reminders.store import ReminderStore
from .arguments import (
    ArgumentShape,
    AskMessageArgs,
    CreateReminderArgs,
    ShapeArgs,
    classify_arguments,
)
from .schemas import ToolCall, ToolCallOutput, ToolCallResult

logger = logging.getLogger(__name__)

UNKNOWN_FUNCTION_MESSAGE = "Unknown function call"

GET_USER_REMINDERS = "GetUserReminders"
STORE_USER_REMINDER = "StoreUserReminder"
DELETE_ALL_REMINDERS = "DeleteAllReminders"
ASK_PERPLEXITY = "AskPerplexity"

KNOWN_FUNCTIONS = frozenset({GET_USER_REMINDERS, STORE_USER_REMINDER, DELETE_ALL_REMINDERS, ASK_PERPLEXITY})

# Metric label for names outside the routing table; keeps label cardinality bounded
UNKNOWN_FUNCTION_LABEL = "unknown"

Handler = Callable[[ShapeArgs], Awaitable[ToolCallOutput]]


class ToolCallDispatcher:
    def __init__(self, store: ReminderStore, forwarder: QuestionForwarder):
        self.store = store
        self.forwarder = forwarder
        self._routes: Dict[Tuple[str, ArgumentShape], Handler] = {
            (GET_USER_REMINDERS, ArgumentShape.EMPTY): self._list_reminders,
            (STORE_USER_REMINDER, ArgumentShape.CREATE): self._store_reminder,
            (DELETE_ALL_REMINDERS, ArgumentShape.EMPTY): self._delete_all_reminders,
            (ASK_PERPLEXITY, ArgumentShape.MESSAGE): self._ask_perplexity,
        }

    async def _list_reminders(self, args: ShapeArgs) -> List[ReminderRead]:
        logger.info("Listing all reminders")
        return await run_in_threadpool(self.store.list_all)

    async def _store_reminder(self, args: CreateReminderArgs) -> ReminderRead:
        reminder = await run_in_threadpool(self.store.create, args.message, args.remind_at)
        try:
            reminder.due_at()
        except ValueError:
            # Stored as given; only consumers that need a timestamp will reject it
            logger.warning(f"Reminder {reminder.id} remind_at is not an RFC 3339 timestamp: {reminder.remind_at!r}")
        return reminder

    async def _delete_all_reminders(self, args: ShapeArgs) -> List[ReminderRead]:
        logger.info("Deleting all reminders")
        await run_in_threadpool(self.store.delete_all)
        return []

    async def _ask_perplexity(self, args: AskMessageArgs) -> str:
        logger.info("Forwarding question to Perplexity")
        return await self.forwarder.ask(args.message)

    def resolve(self, call: ToolCall) -> Optional[Tuple[Handler, ShapeArgs]]:
        """Find the handler for ``call``; None means the call is unrecognized."""
        classified = classify_arguments(call.function.arguments)
        if classified is None:
            return None
        handler = self._routes.get((call.function.name, classified.shape))
        if handler is None:
            return None
        return handler, classified.args

    async def dispatch_one(self, call: ToolCall) -> ToolCallResult:
        name = call.function.name
        metric_name = name if name in KNOWN_FUNCTIONS else UNKNOWN_FUNCTION_LABEL
        logger.info(f"Handling tool call {call.id}: {name}")
        resolved = self.resolve(call)
        if resolved is None:
            logger.warning(f"Unknown function call: {name!r} (tool call {call.id})")
            tool_calls_total.labels(function=metric_name, outcome="unknown").inc()
            return ToolCallResult(toolCallId=call.id, result=UNKNOWN_FUNCTION_MESSAGE)

        handler, args = resolved
        try:
            result = await handler(args)
        except ToolCallError:
            tool_calls_total.labels(function=metric_name, outcome="failed").inc()
            raise
        tool_calls_total.labels(function=metric_name, outcome="handled").inc()
        return ToolCallResult(toolCallId=call.id, result=result)

    async def dispatch(self, calls: Sequence[ToolCall]) -> List[ToolCallResult]:
        results: List[ToolCallResult] = []
        for call in calls:
            results.append(await self.dispatch_one(call))
        logger.info(f"Returning {len(results)} tool call results")
        return results
