"""Storefront - public read-only endpoints for the customer site"""
