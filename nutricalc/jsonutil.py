from __future__ import annotations

import json
from typing import Any

from nutricalc.models import ResultRecord


def dumps(obj: Any) -> str:
    return json.dumps(obj, ensure_ascii=False, separators=(",", ":"))


def result_json(result: ResultRecord) -> str:
    return dumps(result.to_dict())
