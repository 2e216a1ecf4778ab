"""Booking domain models.

Bookings are written by the booking subsystem; the property search only
reads them. A booking occupies ``[check_in, check_out)``.
"""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.core.exceptions import ValidationError  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Booking(models.Model):
    """Reservation of one unit of a room type."""

    class Status(models.TextChoices):
        WAITING_PAYMENT = "waiting_payment", _("Waiting for payment")
        WAITING_CONFIRMATION = "waiting_confirmation", _("Waiting for confirmation")
        CONFIRMED = "confirmed", _("Confirmed")
        COMPLETED = "completed", _("Completed")
        CANCELED = "canceled", _("Canceled")

    room = models.ForeignKey(
        "properties.Room",
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    guest = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="bookings",
    )
    check_in = models.DateField()
    check_out = models.DateField()
    status = models.CharField(
        max_length=32,
        choices=Status.choices,
        default=Status.WAITING_PAYMENT,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(check_out__gt=models.F("check_in")),
                name="booking_valid_dates",
            ),
        ]
        indexes = [
            models.Index(fields=["room", "check_in", "check_out"], name="bookings_bo_room_id_5a1c3e_idx"),
            models.Index(fields=["status"], name="bookings_bo_status_8e2f41_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking #{self.pk} for room {self.room_id}"

    def clean(self) -> None:
        if self.check_in >= self.check_out:
            raise ValidationError(_("Check-out must be later than check-in."))

    @property
    def is_canceled(self) -> bool:
        return self.status == self.Status.CANCELED
