"""
Service layer abstraction.

Each service wraps one collection of the ``RecordStore`` and turns
adapter results and failures into what the API handlers return or
raise.  Handlers never talk to the store directly.
"""
