"""Reusable layout and figure builders for the dashboard pages"""
