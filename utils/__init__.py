"""Parsing and output helpers"""
