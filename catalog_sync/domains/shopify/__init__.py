"""
Shopify storefront domain
"""
