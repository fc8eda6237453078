"""Command line tools"""
