"""
Endpoint subpackage for API v1.

``users`` defines the account routes; ``resources`` builds one CRUD
router per content kind.  Both are aggregated in ``router.py``.
"""
