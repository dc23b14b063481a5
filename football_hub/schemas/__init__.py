"""Schemas pydantic da API e do provedor"""
