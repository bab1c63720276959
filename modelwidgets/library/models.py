from django.core.exceptions import ValidationError
from django.db import models
from django.utils.translation import gettext_lazy as _

UNTOUCHABLE_TITLE = "Untouchable"


class Author(models.Model):
    first_name = models.CharField(max_length=255, blank=True)
    last_name = models.CharField(max_length=255, blank=True)
    prize_count = models.PositiveIntegerField(default=0)

    @property
    def name(self):
        return " ".join(part for part in (self.first_name, self.last_name) if part)

    def __str__(self):
        return self.name


class Book(models.Model):
    author = models.ForeignKey(Author, on_delete=models.SET_NULL, null=True, blank=True, related_name="books")
    title = models.CharField(max_length=255)
    exemplars = models.PositiveIntegerField(default=1)
    digitized = models.BooleanField(default=False)
    notes = models.TextField(blank=True)
    published_on = models.DateField(_("published on"), null=True, blank=True)
    last_read_at = models.DateTimeField(null=True, blank=True)
    price = models.DecimalField(max_digits=8, decimal_places=2, null=True, blank=True)

    def delete(self, *args, **kwargs):
        if self.title == UNTOUCHABLE_TITLE:
            raise ValidationError(f"Can't delete {self.title}")
        return super().delete(*args, **kwargs)

    def __str__(self):
        return self.title
