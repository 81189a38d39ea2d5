"""Storefront sitemap service"""
