from fastapi import Request

_FLASH_KEY = "_flashes"


def flash(request: Request, category: str, message: str) -> None:
    flashes = request.session.get(_FLASH_KEY, [])
    flashes.append([category, message])
    request.session[_FLASH_KEY] = flashes


def get_flashed_messages(request: Request, category: str) -> list[str]:
    """Pop every pending message of one category; the rest stay queued."""
    flashes = request.session.get(_FLASH_KEY, [])
    messages = [message for cat, message in flashes if cat == category]
    remaining = [item for item in flashes if item[0] != category]
    if remaining:
        request.session[_FLASH_KEY] = remaining
    else:
        request.session.pop(_FLASH_KEY, None)
    return messages
