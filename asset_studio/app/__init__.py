"""Presenter and bindable state objects.

This package implements the UI boundary of the workflow:
- Coordinators request state changes through ``WorkflowPresenter`` only
- UI binding via state QObjects (presenter.asset / presenter.modification / presenter.notification)
- Python->UI notifications via presenter.event
"""
