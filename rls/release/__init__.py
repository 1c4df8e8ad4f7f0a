"""Release reconciliation.

- model: the requested release and the remote snapshot
- reconcile: the create / reuse / recreate decision engine
- errors: typed reconcile failures
"""

from __future__ import annotations
