"""Football Hub - API de dados de futebol"""
