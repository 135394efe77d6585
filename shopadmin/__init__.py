"""Shop admin API - restaurant storefront and back-office"""
