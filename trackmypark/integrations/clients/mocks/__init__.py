"""
Mock integration clients.

These clients return fake (but realistic) gateway responses without calling
any external API. They are used when INTEGRATIONS_MODE=mock, for local
front-end development and in tests.

Important:
- Mock clients must follow the SAME interface as real HTTP clients.
- Failures can be injected with ``fail_with`` to exercise error mapping.
"""
