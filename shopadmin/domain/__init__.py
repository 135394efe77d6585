"""Business domains, one package per area of the back-office"""
