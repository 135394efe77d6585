"""Orders domain - customer orders and their delivery status"""
