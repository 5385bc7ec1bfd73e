"""Professionals domain - staff records, work schedules and system access"""
