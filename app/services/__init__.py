"""Services Layer: credential, content-store and content use-case orchestration.

Invariants:
    - Services own all IO; core/ rules are called, never the reverse
    - Routes call services only; services never build HTTP responses

Design Decisions:
    - Store (persistence primitives) split from service (use cases, error choice)
"""
