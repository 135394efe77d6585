"""Deals domain - bundled menu offers and their pricing"""
