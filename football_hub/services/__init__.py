"""Services - regras de negócio"""
