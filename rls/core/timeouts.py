from __future__ import annotations

# GitHub REST calls (per request, transport level)
HTTP_TIMEOUT_SECONDS = 60.0

# Local git operations (log, config)
GIT_TIMEOUT_SECONDS = 30.0

# Wait between tag deletion and release recreation. GitHub sometimes creates
# the new release before the old tag deletion has propagated.
SETTLE_DELAY_SECONDS = 5.0

# How often a cancellable HTTP call checks its token while the request runs
CANCEL_POLL_SECONDS = 0.1
