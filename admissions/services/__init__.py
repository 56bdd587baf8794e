"""Invite composition and calendar encoding services"""
