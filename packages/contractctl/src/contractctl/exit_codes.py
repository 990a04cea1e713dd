from __future__ import annotations

OK = 0
ERR_VERIFY = 1
ERR_USAGE = 2
ERR_DOCUMENT = 3
ERR_CONFIG = 4
ERR_VALIDATION = 5
ERR_INTERNAL = 99
