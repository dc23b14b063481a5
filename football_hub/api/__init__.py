"""API HTTP"""
