"""Endpoints da API v1"""
