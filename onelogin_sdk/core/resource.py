"""Generic resource client shared by every OneLogin service.

A resource is described by a path template and a model; the client turns
CRUD verbs into executor calls and decodes the returned bytes.
"""
from __future__ import annotations
import json
from typing import Any, Generic, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from .client import QueryParams, ResourceRepository
from .exceptions import DecodeError
from .models import Query

ModelT = TypeVar("ModelT", bound=BaseModel)


def decode_json(raw: bytes) -> Any:
    """Parse a response body; empty bodies decode to None."""
    if not raw or not raw.strip():
        return None
    try:
        return json.loads(raw)
    except ValueError as exc:
        raise DecodeError(f"Response is not valid JSON: {exc}", _text(raw)) from exc


def decode_one(model: Type[ModelT], raw: bytes) -> ModelT:
    """Decode a single JSON object into the given model."""
    payload = decode_json(raw)
    if not isinstance(payload, dict):
        raise DecodeError(f"Expected a JSON object for {model.__name__}", _text(raw))
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise DecodeError(f"Response does not match {model.__name__}: {exc}", _text(raw)) from exc


def decode_many(model: Type[ModelT], raw: bytes) -> List[ModelT]:
    """Decode a JSON array into a list of the given model."""
    payload = decode_json(raw)
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise DecodeError(f"Expected a JSON array of {model.__name__}", _text(raw))
    try:
        return [model.model_validate(item) for item in payload]
    except ValidationError as exc:
        raise DecodeError(f"Response does not match {model.__name__}: {exc}", _text(raw)) from exc


def merge_created(model: Type[ModelT], submitted: Union[ModelT, dict], raw: bytes) -> ModelT:
    """Combine a submitted object with the server's create/update response.

    Several endpoints only answer with ``{"id": ...}`` (or ``[{"id": ...}]``); the returned object
    then carries the submitted fields plus whatever the server sent back.
    """
    base = submitted.model_dump(exclude_none=True) if isinstance(submitted, BaseModel) else dict(submitted)
    payload = decode_json(raw)
    if payload is None:
        payload = {}
    # Some endpoints wrap the new id in a single-element list
    if isinstance(payload, list) and len(payload) == 1:
        payload = payload[0]
    if not isinstance(payload, dict):
        raise DecodeError(f"Expected a JSON object for {model.__name__}", _text(raw))
    base.update(payload)
    try:
        return model.model_validate(base)
    except ValidationError as exc:
        raise DecodeError(f"Response does not match {model.__name__}: {exc}", _text(raw)) from exc


def _text(raw: bytes) -> str:
    return raw.decode("utf-8", errors="replace")


def _params(query: Union[Query, QueryParams, None]) -> Optional[QueryParams]:
    if isinstance(query, Query):
        return query.to_params()
    return query


class ResourceClient(Generic[ModelT]):
    """CRUD operations for one resource kind.

    Usage:
        users = ResourceClient(repo, "https://api.us.onelogin.com", "/api/2/users", User)
        alice = users.get(42)

    The path may contain ``{placeholders}`` that are filled from keyword
    arguments of each call, e.g. ``/api/2/apps/{app_id}/rules``.
    """

    def __init__(self, repository: ResourceRepository, base_url: str, path: str, model: Type[ModelT]):
        self.repository = repository
        self.base_url = base_url.rstrip("/")
        self.path = path
        self.model = model

    def url(self, *segments: Any, **path_args: Any) -> str:
        """Build an absolute URL for the collection or a member of it.

        Raises:
            ValueError: A path segment or placeholder value is None
        """
        missing = [name for name, value in path_args.items() if value is None]
        if missing or any(segment is None for segment in segments):
            raise ValueError(f"Missing identifier for {self.path}: {', '.join(missing) or 'resource id'}")
        url = f"{self.base_url}{self.path.format(**path_args)}"
        for segment in segments:
            url = f"{url}/{segment}"
        return url

    def list(self, query: Union[Query, QueryParams, None] = None, **path_args: Any) -> List[ModelT]:
        raw = self.repository.read(self.url(**path_args), _params(query))
        return decode_many(self.model, raw)

    def get(self, resource_id: Any, **path_args: Any) -> ModelT:
        raw = self.repository.read(self.url(resource_id, **path_args))
        return decode_one(self.model, raw)

    def create(self, obj: Union[ModelT, dict], **path_args: Any) -> ModelT:
        raw = self.repository.create(self.url(**path_args), obj)
        return merge_created(self.model, obj, raw)

    def update(self, resource_id: Any, obj: Union[ModelT, dict], **path_args: Any) -> ModelT:
        raw = self.repository.update(self.url(resource_id, **path_args), obj)
        return merge_created(self.model, obj, raw)

    def destroy(self, resource_id: Any, **path_args: Any) -> None:
        self.repository.destroy(self.url(resource_id, **path_args))
