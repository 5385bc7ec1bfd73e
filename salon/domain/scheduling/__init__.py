"""Scheduling domain - appointments, conflict detection and public availability"""
