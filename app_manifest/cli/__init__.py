"""Command line interface for app-manifest"""
