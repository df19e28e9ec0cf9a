"""Streakboard Gateway"""
