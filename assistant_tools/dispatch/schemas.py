"""
Request and response envelopes for the tool-call endpoint
"""
from typing import Any, List, Union
from pydantic import BaseModel, ConfigDict, Field

from assistant_tools.reminders.schemas import ReminderRead


class FunctionCall(BaseModel):
    """Function name plus raw, not yet classified, arguments"""
    name: str
    arguments: Any


class ToolCall(BaseModel):
    """One tool call inside a batch"""
    id: str
    function: FunctionCall


class ToolCallMessage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    tool_calls: List[ToolCall] = Field(..., alias="toolCalls")


class ToolCallRequest(BaseModel):
    """Incoming envelope: {"message": {"toolCalls": [...]}}"""
    message: ToolCallMessage


# Untagged on the wire; consumers tell the variants apart by shape
ToolCallOutput = Union[ReminderRead, List[ReminderRead], str]


class ToolCallResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    tool_call_id: str = Field(..., alias="toolCallId")
    result: ToolCallOutput


class ToolCallResponse(BaseModel):
    """Outgoing envelope, results in the same order as the incoming calls"""
    results: List[ToolCallResult]
