import json
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from ipstack_client.errors import ApiError, DecodeError, IpstackError
from ipstack_client.logger import logger
from ipstack_client.models.records import ApiErrorEnvelope

T = TypeVar("T")


class ResponseEnvelope:
    """Outcome of one executed request: the raw body or the error that prevented it.

    Resolution happens in two stages that are meant to be chained:

        envelope.check_error()
        record = envelope.decode(GeoRecord)

    or simply `envelope.resolve(GeoRecord)`. Once an error is stored, the raw
    body is treated as absent and `decode` re-raises that error unchanged.
    """

    def __init__(self, raw_data: bytes | None = None, error: IpstackError | None = None) -> None:
        self._raw_data = raw_data
        self.error = error

    @classmethod
    def ok(cls, raw_data: bytes) -> "ResponseEnvelope":
        return cls(raw_data=raw_data)

    @classmethod
    def failed(cls, error: IpstackError) -> "ResponseEnvelope":
        return cls(error=error)

    @property
    def raw_data(self) -> bytes | None:
        if self.error is not None:
            return None
        return self._raw_data

    def check_error(self) -> IpstackError | None:
        """Stage 1: detect a failure signalled by the API inside the body.

        Returns the stored error, if any, without looking at the body again.
        A body that is not valid JSON yields a DecodeError. A JSON object with
        `"success": false` yields the nested ApiError. Both are stored on the
        envelope so that a later `decode` call reports them.
        """
        if self.error is not None:
            return self.error

        try:
            data: Any = json.loads(self._raw_data or b"")
        except ValueError as exc:
            self.error = DecodeError(f"Failed to decode ipstack response as JSON: {exc}")
            return self.error

        # Batch lookups answer with a JSON array, which is never an error envelope.
        if not isinstance(data, dict):
            return None

        try:
            envelope = ApiErrorEnvelope.model_validate(data)
        except ValidationError as exc:
            self.error = DecodeError(f"Failed to decode ipstack error envelope: {exc}")
            return self.error

        if envelope.success:
            return None

        body = envelope.error
        if body is None:
            self.error = ApiError(code=0, type="unknown_error", info="ipstack reported failure without details")
        else:
            self.error = ApiError(code=body.code, type=body.type, info=body.info)
        logger.warning(f"ipstack API error: {self.error}")
        return self.error

    def decode(self, target: type[T]) -> T:
        """Stage 2: decode the body into `target`, or raise the error already stored."""
        if self.error is not None:
            raise self.error
        try:
            return TypeAdapter(target).validate_json(self._raw_data or b"")
        except ValidationError as exc:
            raise DecodeError(f"Failed to decode ipstack response into {target!r}: {exc}") from exc

    def resolve(self, target: type[T]) -> T:
        """Run both stages and return the decoded value."""
        self.check_error()
        return self.decode(target)
