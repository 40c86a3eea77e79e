from prometheus_client import Counter


tool_calls_total = Counter(
    "tool_calls_total",
    "Total tool calls received, by function name and outcome",
    ["function", "outcome"],
)

reminders_created_total = Counter(
    "reminders_created_total",
    "Total reminders created via tool calls",
)

reminders_deleted_total = Counter(
    "reminders_deleted_total",
    "Total reminders removed by DeleteAllReminders",
)

forwarding_requests_total = Counter(
    "forwarding_requests_total",
    "Total questions forwarded to the external answering service",
    ["outcome"],
)
