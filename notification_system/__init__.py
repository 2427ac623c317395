"""Notification pipeline: decorated content, observable publisher, delivery channels."""
