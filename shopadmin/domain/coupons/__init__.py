"""Coupons domain - discount codes and how they apply to an order"""
