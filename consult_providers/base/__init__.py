"""
Consult Base Package

Provider-agnostic building blocks shared by the adapters, the dispatcher and
the service layer:

- ``errors``: consultation error taxonomy
- ``models``: immutable DTOs (configs, descriptors, outcomes, batches)
- ``interfaces``: the ``CompletionProvider`` adapter protocol
- ``catalog``: the model catalog and addressable-id helpers
- ``factory``: lazy creation of provider adapters by provider id
- ``logging``, ``http``, ``timeouts``: ambient infrastructure

Submodules are imported explicitly by callers; nothing is re-exported here so
that ``consult_providers.config`` can depend on ``base`` without cycles.
"""
