"""Repositories async por entidade"""
