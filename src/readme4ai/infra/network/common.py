from __future__ import annotations

from readme4ai.domain.constants import APP_VERSION

USER_AGENT = f"readme4ai-Client/{APP_VERSION}"

# Chat completions routinely take more than a minute
COMPLETION_TIMEOUT = 120
