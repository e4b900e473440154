from django.db import models
from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.utils.translation import gettext_lazy as _


class CustomUserManager(BaseUserManager):
    """
    Creates users with email as the login field.
    The public forum handle (username) defaults to the email local part.
    """
    use_in_migrations = True

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError(_('Users must have an email address'))

        email = self.normalize_email(email)
        extra_fields.setdefault('username', email.split('@', 1)[0])
        user = self.model(email=email, **extra_fields)

        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()

        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('is_active', True)

        if extra_fields.get('is_staff') is not True:
            raise ValueError(_('Superuser must have is_staff=True.'))
        if extra_fields.get('is_superuser') is not True:
            raise ValueError(_('Superuser must have is_superuser=True.'))

        return self.create_user(email, password, **extra_fields)


class CustomUser(AbstractUser):
    """Forum member. Staff members moderate banner bookings."""
    username = models.CharField(_('username'), max_length=40, blank=True, default='')
    email = models.EmailField(_('email address'), unique=True)
    avatar_url = models.URLField(_('avatar url'), blank=True, default='')
    is_suspended = models.BooleanField(
        _('suspended'),
        default=False,
        help_text=_('Suspended members cannot purchase banners.'),
    )

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    objects = CustomUserManager()

    def __str__(self):
        return self.username or self.email

    @property
    def public_name(self):
        return self.username or self.email.split('@', 1)[0]
