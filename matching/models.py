"""
Read-only mirrors of the hosted marketplace tables.

The ``profiles`` and ``targets`` tables are owned by the hosted backend (row
level security, realtime feeds, auth).  Django only reads them, so both models
are unmanaged: migrations never create or alter these tables.
"""

from django.db import models


class SupabaseProfileQuerySet(models.QuerySet):

    def sellers(self):
        return self.filter(role=SupabaseProfile.Role.SELLER)

    def accepting_notifications(self):
        return self.sellers().filter(notifications_enabled=True)


class SupabaseProfile(models.Model):
    """A marketplace user: a buyer posting targets or a seller answering them."""

    class Role(models.TextChoices):
        BUYER = 'buyer', 'Buyer'
        SELLER = 'seller', 'Seller'

    class SellerType(models.TextChoices):
        BUSINESS = 'business', 'Business'
        INDIVIDUAL = 'individual', 'Individual'

    id = models.UUIDField(primary_key=True)
    email = models.EmailField(max_length=255, null=True, blank=True)
    full_name = models.CharField(max_length=255, blank=True, default='')
    city = models.CharField(max_length=255, blank=True, default='')
    profession = models.CharField(max_length=255, null=True, blank=True)
    role = models.CharField(max_length=20, choices=Role.choices, default=Role.BUYER)
    seller_type = models.CharField(
        max_length=20,
        choices=SellerType.choices,
        null=True,
        blank=True,
    )
    business_name = models.CharField(max_length=255, null=True, blank=True)
    primary_sector = models.CharField(
        max_length=255,
        null=True,
        blank=True,
        help_text='Free text; compared against target categories when matching',
    )
    notifications_enabled = models.BooleanField(default=False)
    created_at = models.DateTimeField(null=True, blank=True)
    updated_at = models.DateTimeField(null=True, blank=True)

    objects = SupabaseProfileQuerySet.as_manager()

    class Meta:
        managed = False
        db_table = 'profiles'
        ordering = ['-created_at']
        verbose_name = 'Profile'
        verbose_name_plural = 'Profiles'

    def __str__(self):
        if self.business_name:
            return f"{self.full_name} ({self.business_name})"
        return self.full_name or str(self.id)

    @property
    def is_seller(self):
        return self.role == self.Role.SELLER


class SupabaseTargetQuerySet(models.QuerySet):

    def active(self):
        return self.filter(status=SupabaseTarget.Status.ACTIVE)

    def recent_active(self, limit):
        """Newest active targets first, capped at ``limit`` rows."""
        return self.active().order_by('-created_at')[:limit]


class SupabaseTarget(models.Model):
    """A buyer's wanted-item request."""

    class Status(models.TextChoices):
        ACTIVE = 'active', 'Active'
        CLOSED = 'closed', 'Closed'
        ARCHIVED = 'archived', 'Archived'

    id = models.UUIDField(primary_key=True)
    user = models.ForeignKey(
        SupabaseProfile,
        on_delete=models.DO_NOTHING,
        db_column='user_id',
        db_constraint=False,
        related_name='targets',
    )
    title = models.CharField(max_length=255)
    description = models.TextField(null=True, blank=True)
    category = models.CharField(
        max_length=255,
        help_text='Free text; may be a user-suggested category not yet approved',
    )
    budget = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    location = models.CharField(max_length=255, blank=True, default='')
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.ACTIVE)
    created_at = models.DateTimeField(null=True, blank=True)
    updated_at = models.DateTimeField(null=True, blank=True)

    objects = SupabaseTargetQuerySet.as_manager()

    class Meta:
        managed = False
        db_table = 'targets'
        ordering = ['-created_at']
        verbose_name = 'Target'
        verbose_name_plural = 'Targets'

    def __str__(self):
        return f"{self.title} ({self.category}, {self.location})"
