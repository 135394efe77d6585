"""Catalog domain - menu categories and products"""
