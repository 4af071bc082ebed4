"""
Real HTTP integration clients.

These clients talk to the live payment gateways:
- razorpay.py: Razorpay Orders REST API (httpx)
- stripe_checkout.py: Stripe Checkout Sessions (Stripe SDK)

Important:
- Must implement the same interfaces as the mock clients
- Must return data shaped according to trackmypark/integrations/contracts/*

Switching:
The selection of mock vs real clients happens in trackmypark/api/main.py only.
"""
