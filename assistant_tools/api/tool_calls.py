from fastapi import APIRouter, Depends, Request

from assistant_tools.dispatch.dispatcher import ToolCallDispatcher
from assistant_tools.dispatch.schemas import ToolCallRequest, ToolCallResponse


router = APIRouter()


def get_dispatcher(request: Request) -> ToolCallDispatcher:
    return request.app.state.dispatcher


@router.post("/tool-call", response_model=ToolCallResponse)
async def handle_tool_call(
    payload: ToolCallRequest,
    dispatcher: ToolCallDispatcher = Depends(get_dispatcher),
):
    # Collaborator failures propagate to the ToolCallError handler in main
    results = await dispatcher.dispatch(payload.message.tool_calls)
    return ToolCallResponse(results=results)


@router.get("/health")
def health_check():
    return {"status": "healthy", "service": "tool-calls"}
