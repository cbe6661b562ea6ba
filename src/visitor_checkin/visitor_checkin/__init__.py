"""Visitor Check-in package.

QR-code driven visitor intake: organisations register a location and a QR code,
visitors pass an optional geofence check and submit a form that admins review.
Organized by feature modules (geofence, locations, qrcodes, submissions, ...)
with a thin Flask controller layer over service/repository layers.
"""
