"""Ledgerview Dashboard"""
