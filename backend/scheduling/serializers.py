from rest_framework import serializers

from . import services
from .models import Project, Task, TaskDependency


class ProjectSerializer(serializers.ModelSerializer):
    class Meta:
        model = Project
        fields = ["id", "name", "description", "start_date", "end_date", "is_completed"]
        read_only_fields = ["is_completed"]

    def validate(self, attrs):
        start = attrs.get("start_date", getattr(self.instance, "start_date", None))
        end = attrs.get("end_date", getattr(self.instance, "end_date", None))
        if start is not None and end is not None and end < start:
            raise serializers.ValidationError({"end_date": "End date cannot be before the start date."})
        return attrs


class TaskSerializer(serializers.ModelSerializer):
    # working days after start_date; when omitted the submitted date span is used
    duration = serializers.IntegerField(min_value=0, required=False, write_only=True)
    end_date = serializers.DateField(required=False)

    class Meta:
        model = Task
        fields = [
            "id", "project", "name", "description", "start_date", "end_date",
            "duration", "is_completed", "priority", "assigned_user",
        ]
        read_only_fields = ["assigned_user"]

    def validate(self, attrs):
        # A task belongs to one project for its whole life
        if self.instance is not None and "project" in attrs and attrs["project"] != self.instance.project:
            raise serializers.ValidationError({"project": "A task cannot be moved to another project."})
        # Explicit duration wins over the submitted end date
        if "duration" in attrs:
            return attrs
        start = attrs.get("start_date", getattr(self.instance, "start_date", None))
        end = attrs.get("end_date")
        if start is not None and end is not None and end < start:
            raise serializers.ValidationError({"end_date": "End date cannot be before the start date."})
        return attrs

    def create(self, validated_data):
        return services.create_task(validated_data)

    def update(self, instance, validated_data):
        return services.update_task(instance, validated_data)


class TaskDependencySerializer(serializers.ModelSerializer):
    class Meta:
        model = TaskDependency
        fields = ["id", "predecessor", "successor", "created_at"]


class DependencyInputSerializer(serializers.Serializer):
    predecessor = serializers.IntegerField()
    successor = serializers.IntegerField()
