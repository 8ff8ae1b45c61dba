from django.db import models


class HostelQuerySet(models.QuerySet):
    def for_hostel(self, hostel):
        if hostel is None:
            return self
        return self.filter(hostel=hostel)

    def active(self):
        return self.filter(is_active=True)


class HostelManager(models.Manager):
    def get_queryset(self):
        return HostelQuerySet(self.model, using=self._db)

    def for_hostel(self, hostel):
        return self.get_queryset().for_hostel(hostel)

    def active(self):
        return self.get_queryset().active()
