"""
Policy layer: what the API does with a request before and after a gateway call.

- order_service.py: Razorpay order creation and connectivity probe
- verification_service.py: Razorpay payment signature checks
- checkout_service.py: Stripe checkout sessions and product lookups
- webhook_service.py: Stripe webhook verification and dispatch
- error_mapping.py: gateway error -> HTTP error table
"""
