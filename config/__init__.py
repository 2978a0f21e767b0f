"""Probe configuration package"""
