"""
Request Builder - Maps a (resource, operation) pair onto one Google Chat call.

Routing table:

  media:download   GET    /v1/media/{resourceName}?alt=media
  space:get        GET    /v1/{spaceName}
  space:getAll     GET    /v1/spaces                                    (paged)
  member:get       GET    /v1/spaces/{spaceName}/members/{memberName}
  member:getAll    GET    /v1/spaces/{spaceName}/members                (paged)
  message:create   POST   /v1/spaces/{spaceName}                        ?threadKey
  message:delete   DELETE /v1/spaces/{spaceName}/messages/{messageName}
  message:get      GET    /v1/spaces/{spaceName}/messages/{messageName}
  message:update   POST   /v1/spaces/{spaceName}/messages/{messageName} ?updateMask
  attachment:get   POST   /v1/spaces/{spaceName}/messages/{messageName}/attachments/{attachmentName}

Pairs outside the table build nothing (build() returns None) and the item
produces no output.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

from .message_payload import (
    UpdateMask,
    payload_source,
    resolve_create_payload,
    resolve_update_payload,
)
from .pagination import single_page_query

RESOURCES = ("media", "space", "member", "message", "attachment")


@dataclass(frozen=True)
class RequestSpec:
    """One HTTP call. list_key is set for routes that can be paged."""

    method: str
    path: str
    body: Optional[Dict[str, Any]] = None
    query: Optional[Dict[str, Any]] = None
    list_key: Optional[str] = None


class ResolvedParams:
    """Lazy view of the parameters of one item.

    Values are fetched from the host only when a builder asks for them, so a
    failing precondition stops resolution of later parameters. Run-level
    values (resolved once at item 0) are passed in as pinned.
    """

    def __init__(self, get_param: Callable[[str, int], Any], index: int,
                 pinned: Optional[Dict[str, Any]] = None):
        self._get_param = get_param
        self.index = index
        self._pinned = dict(pinned or {})

    def get(self, name: str) -> Any:
        if name in self._pinned:
            return self._pinned[name]
        return self._get_param(name, self.index)


def _media_download(params):
    return RequestSpec("GET", f"/v1/media/{params.get('resourceName')}?alt=media")


def _space_get(params):
    return RequestSpec("GET", f"/v1/{params.get('spaceName')}")


def _paged(path: str, list_key: str, params) -> RequestSpec:
    if params.get("returnAll"):
        return RequestSpec("GET", path, list_key=list_key)
    query = single_page_query(params.get("additionalFields"))
    return RequestSpec("GET", path, query=query, list_key=list_key)


def _space_get_all(params):
    return _paged("/v1/spaces", "spaces", params)


def _member_get(params):
    space_name = params.get("spaceName")
    member_name = params.get("memberName")
    return RequestSpec("GET", f"/v1/spaces/{space_name}/members/{member_name}")


def _member_get_all(params):
    space_name = params.get("spaceName")
    return _paged(f"/v1/spaces/{space_name}/members", "memberships", params)


def _message_path(params) -> str:
    space_name = params.get("spaceName")
    message_name = params.get("messageName")
    return f"/v1/spaces/{space_name}/messages/{message_name}"


def _message_create(params):
    space_name = params.get("spaceName")
    query = {}
    thread_key = params.get("threadKey")
    if thread_key:
        query["threadKey"] = thread_key

    source = payload_source(params, "jsonParameterMessage", "messageJson", "messageUi")
    message = resolve_create_payload(source)

    return RequestSpec("POST", f"/v1/spaces/{space_name}", body=message.to_body(), query=query)


def _message_delete(params):
    return RequestSpec("DELETE", _message_path(params))


def _message_get(params):
    return RequestSpec("GET", _message_path(params))


def _message_update(params):
    path = _message_path(params)

    # Raises before any payload parameter is read
    mask = UpdateMask(params.get("updateMask"))

    source = payload_source(params, "jsonParameterUpdateOptions", "updateOptionsJson", "textUi")
    message = resolve_update_payload(source, mask)

    return RequestSpec(
        "POST",
        path,
        body=message.to_body(fields=mask.fields),
        query={"updateMask": mask.render()},
    )


def _attachment_get(params):
    # The API documents this as a read but it is issued as POST
    attachment_name = params.get("attachmentName")
    return RequestSpec("POST", f"{_message_path(params)}/attachments/{attachment_name}")


ROUTES: Dict[Tuple[str, str], Callable[[ResolvedParams], RequestSpec]] = {
    ("media", "download"): _media_download,
    ("space", "get"): _space_get,
    ("space", "getAll"): _space_get_all,
    ("member", "get"): _member_get,
    ("member", "getAll"): _member_get_all,
    ("message", "create"): _message_create,
    ("message", "delete"): _message_delete,
    ("message", "get"): _message_get,
    ("message", "update"): _message_update,
    ("attachment", "get"): _attachment_get,
}


def is_paged(resource: str, operation: str) -> bool:
    return operation == "getAll" and (resource, operation) in ROUTES


def build(resource: str, operation: str, params: ResolvedParams) -> Optional[RequestSpec]:
    """Build the request for one item, or None for an unknown pair.

    Raises:
        InvalidInput: If the item's message parameters are invalid.
    """
    builder = ROUTES.get((resource, operation))
    if builder is None:
        return None
    return builder(params)
