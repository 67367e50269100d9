from django.conf import settings
from django.db import models
from django.db.models import F, Q


class Project(models.Model):
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    start_date = models.DateField()
    end_date = models.DateField()
    # derived: only the completion tracker sets it
    is_completed = models.BooleanField(default=False)

    class Meta:
        ordering = ["start_date", "id"]

    def __str__(self):
        return self.name


class Task(models.Model):
    project = models.ForeignKey(Project, related_name="tasks", on_delete=models.CASCADE)
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    start_date = models.DateField()
    end_date = models.DateField()
    is_completed = models.BooleanField(default=False)
    priority = models.IntegerField(default=0)
    assigned_user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        related_name="assigned_tasks",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
    )

    class Meta:
        ordering = ["start_date", "id"]
        constraints = [
            models.CheckConstraint(condition=Q(end_date__gte=F("start_date")), name="task_end_not_before_start"),
        ]

    def __str__(self):
        return self.name


class TaskDependency(models.Model):
    """Edge predecessor -> successor: the successor may not start before the predecessor completes.

    Both ends are PROTECT: incident edges have to be removed before a task can
    be deleted (see services.delete_task).
    """

    predecessor = models.ForeignKey(Task, related_name="successor_links", on_delete=models.PROTECT)
    successor = models.ForeignKey(Task, related_name="predecessor_links", on_delete=models.PROTECT)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["predecessor", "successor"], name="unique_task_dependency"),
            models.CheckConstraint(condition=~Q(predecessor=F("successor")), name="no_self_dependency"),
        ]

    def __str__(self):
        return f"{self.predecessor_id} -> {self.successor_id}"
