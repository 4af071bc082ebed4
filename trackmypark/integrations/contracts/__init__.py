"""
Contracts (data models).

This folder defines the request/response shapes for the payment gateways:
- order and checkout-session request/result formats
- the parking product catalogue
- validation helpers run before any gateway call

Both mock and real HTTP clients return these contracts, so the API layer
never handles provider-specific dicts.
"""
