"""Riders domain - delivery riders and their login credentials"""
