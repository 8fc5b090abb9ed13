"""Cogs package - Discord command surfaces"""
