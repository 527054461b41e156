import json
from functools import lru_cache

from pydantic import ValidationError

from pausestream.bootstrap.config.settings import DemoSettings


@lru_cache
def get_config() -> DemoSettings:
    try:
        return DemoSettings()
    except ValidationError as ex:
        msg = ["Configuration validation failed:"]
        errs = json.loads(ex.json())
        for err in errs:
            msg.append(f"  {'.'.join(str(part) for part in err['loc'])}: {err['msg']}")
        raise SystemExit("\n".join(msg))
