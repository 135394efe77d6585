"""Shop domain - profile, contact details, location and delivery settings"""
