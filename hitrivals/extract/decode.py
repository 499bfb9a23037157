"""Decode Tank01 schedule and live-score payloads.

The schedule endpoints don't agree on an envelope: most days return
{"statusCode": 200, "body": [...]}, some deployments return a bare list, and
some wrap the list in an object whose other keys don't validate. Each shape
is tried in turn.
"""

import json
import logging

from pydantic import TypeAdapter, ValidationError

from hitrivals.models.game import League
from hitrivals.models.records import (
    GameRecord,
    MLBLineScore,
    MLBLineScoreEnvelope,
    NBABoxScore,
    NBABoxScoreEnvelope,
    ScheduleEnvelope,
)

logger = logging.getLogger(__name__)

_RECORD_LIST = TypeAdapter(list[GameRecord])


def _decode_envelope(payload: bytes) -> list[GameRecord]:
    return ScheduleEnvelope.model_validate_json(payload).body


def _decode_bare_list(payload: bytes) -> list[GameRecord]:
    return _RECORD_LIST.validate_json(payload)


def _decode_body_key(payload: bytes) -> list[GameRecord]:
    data = json.loads(payload)
    if not isinstance(data, dict):
        raise ValueError("payload is not a JSON object")
    body = data.get("body")
    if not isinstance(body, list) or not all(isinstance(item, dict) for item in body):
        raise ValueError("'body' is not a list of objects")
    return _RECORD_LIST.validate_python(body)


_SHAPES = (
    ("envelope", _decode_envelope),
    ("bare list", _decode_bare_list),
    ("body key", _decode_body_key),
)


def decode_schedule(payload: bytes) -> list[GameRecord] | None:
    """Parse a schedule payload into records, in upstream order.

    Returns:
        The records from the first shape that validates, or None when none do.
    """
    for name, decoder in _SHAPES:
        try:
            records = decoder(payload)
        except (ValidationError, ValueError) as e:
            logger.debug("Schedule payload is not a %s: %s", name, e)
            continue
        logger.info("Decoded %d schedule records as %s", len(records), name)
        return records

    logger.warning("Could not decode schedule payload (first 200 bytes: %r)", payload[:200])
    return None


def decode_live_score(payload: bytes, league: League) -> MLBLineScore | NBABoxScore | None:
    """Parse a getMLBLineScore / getNBABoxScore payload, or None if it doesn't validate."""
    envelope = MLBLineScoreEnvelope if league == League.MLB else NBABoxScoreEnvelope
    try:
        return envelope.model_validate_json(payload).body
    except ValidationError as e:
        logger.warning("Could not decode %s live score: %s", league.value.upper(), e)
        return None
