"""
API Routers

- store: public storefront (products, cart, checkout, settings)
- admin: admin panel, behind Supabase Auth
"""
