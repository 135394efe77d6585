"""
Scheduling domain - the shop's weekly opening hours.

model.py      day/week value objects, minutes since midnight
validator.py  advisory warnings (never mutates, never blocks)
overview.py   timeline segments and human-readable hours
schemas.py    "HH:MM" wire format
repository.py schedules table + shop_settings.global_shop_status
service.py    editing, save rules and "open now"
router.py     admin endpoints under /schedules
"""
