"""Raw wire-record factories for unit tests.

Every helper returns plain dicts shaped like the agent backend's JSON, so
tests exercise the same parsing path as real data.
"""

from typing import Any, Optional


def text(value: str = "Hello") -> dict[str, Any]:
    return {"type": "text", "text": value}


def reasoning(value: str = "Thinking...") -> dict[str, Any]:
    return {"type": "reasoning", "text": value}


def tool(
    name: str = "calculator",
    state: str = "output-available",
    input: Any = None,
    output: Any = None,
    error_text: Optional[str] = None,
    **extra: Any,
) -> dict[str, Any]:
    part: dict[str, Any] = {"type": f"tool-{name}", "toolCallId": f"call-{name}", "state": state}
    if input is not None:
        part["input"] = input
    if output is not None:
        part["output"] = output
    if error_text is not None:
        part["errorText"] = error_text
    part.update(extra)
    return part


def source_url(url: str, title: Optional[str] = None) -> dict[str, Any]:
    part: dict[str, Any] = {"type": "source-url", "url": url, "sourceId": f"src-{url}"}
    if title is not None:
        part["title"] = title
    return part


def step(
    name: str = "routing-agent",
    status: str = "success",
    reason: Optional[str] = None,
    output: Any = None,
    tool_results: Optional[list[dict[str, Any]]] = None,
) -> dict[str, Any]:
    data: dict[str, Any] = {"name": name, "status": status}
    task: dict[str, Any] = {"id": f"task-{name}", "type": "agent"}
    if reason is not None:
        task["reason"] = reason
    if tool_results is not None:
        task["toolResults"] = tool_results
    data["task"] = task
    if output is not None:
        data["output"] = output
    return data


def network(
    steps: Optional[list[dict[str, Any]]] = None,
    output: Any = None,
    status: str = "finished",
    usage: Optional[int] = None,
) -> dict[str, Any]:
    data: dict[str, Any] = {"name": "travel-network", "status": status, "steps": steps or []}
    if output is not None:
        data["output"] = output
    if usage is not None:
        data["usage"] = {"totalTokens": usage}
    return {"type": "data-network", "data": data}


def dynamic_tool(*children: dict[str, Any], result: Optional[str] = None) -> dict[str, Any]:
    output: dict[str, Any] = {"childMessages": list(children)}
    if result is not None:
        output["result"] = result
    return {
        "type": "dynamic-tool",
        "toolCallId": "call-network",
        "toolName": "travel-network",
        "state": "output-available",
        "input": {},
        "output": output,
    }


def child_tool(name: str, args: Any = None, output: Any = None) -> dict[str, Any]:
    child: dict[str, Any] = {"type": "tool", "toolCallId": f"child-{name}", "toolName": name}
    if args is not None:
        child["args"] = args
    if output is not None:
        child["toolOutput"] = output
    return child


def child_text(content: str) -> dict[str, Any]:
    return {"type": "text", "content": content}


def weather_data(location: str = "Madrid") -> dict[str, Any]:
    return {
        "temperature": 21.4,
        "feelsLike": 20.0,
        "humidity": 40,
        "windSpeed": 12,
        "windGust": 20,
        "conditions": "Clear sky",
        "location": location,
    }


def message(
    id: str,
    role: str = "assistant",
    parts: Optional[list[dict[str, Any]]] = None,
    metadata: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    msg: dict[str, Any] = {"id": id, "role": role, "parts": parts or []}
    if metadata is not None:
        msg["metadata"] = metadata
    return msg


def user(id: str, content: str = "Hi") -> dict[str, Any]:
    return message(id, role="user", parts=[text(content)])
