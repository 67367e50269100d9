# views.py
from django.contrib.auth import get_user_model
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from . import services
from .models import Project, Task
from .serializers import (
    DependencyInputSerializer,
    ProjectSerializer,
    TaskDependencySerializer,
    TaskSerializer,
)


class ProjectList(APIView):
    """
    GET  /api/projects/  list projects
    POST /api/projects/  create a project
    """

    def get(self, request):
        projects = Project.objects.all()
        return Response(ProjectSerializer(projects, many=True).data)

    def post(self, request):
        serializer = ProjectSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(serializer.data, status=status.HTTP_201_CREATED)


class ProjectDetail(APIView):
    def get(self, request, pk):
        project = get_object_or_404(Project, pk=pk)
        return Response(ProjectSerializer(project).data)

    def put(self, request, pk):
        return self._update(request, pk, partial=False)

    def patch(self, request, pk):
        return self._update(request, pk, partial=True)

    def delete(self, request, pk):
        project = get_object_or_404(Project, pk=pk)
        services.delete_project(project)
        return Response(status=status.HTTP_204_NO_CONTENT)

    def _update(self, request, pk, partial):
        project = get_object_or_404(Project, pk=pk)
        serializer = ProjectSerializer(project, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(serializer.data)


class ProjectEvaluateCompletion(APIView):
    """
    POST /api/projects/<pk>/evaluate-completion/
    Re-runs the completion check; the flag is set when every task is done, never cleared.
    """

    def post(self, request, pk):
        project = get_object_or_404(Project, pk=pk)
        outcome = services.evaluate_project(project)
        return Response({"outcome": outcome.value, "project": ProjectSerializer(project).data})


class TaskList(APIView):
    """
    GET  /api/tasks/?project=<id>  list tasks, optionally for one project
    POST /api/tasks/               create a task; end_date is computed in working days
    """

    def get(self, request):
        tasks = Task.objects.all()
        project_id = request.query_params.get("project")
        if project_id:
            tasks = tasks.filter(project_id=project_id)
        return Response(TaskSerializer(tasks, many=True).data)

    def post(self, request):
        serializer = TaskSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(serializer.data, status=status.HTTP_201_CREATED)


class TaskDetail(APIView):
    """Task detail. Setting is_completed to true reschedules direct successors."""

    def get(self, request, pk):
        task = get_object_or_404(Task, pk=pk)
        return Response(TaskSerializer(task).data)

    def put(self, request, pk):
        return self._update(request, pk, partial=False)

    def patch(self, request, pk):
        return self._update(request, pk, partial=True)

    def delete(self, request, pk):
        task = get_object_or_404(Task, pk=pk)
        services.delete_task(task)
        return Response(status=status.HTTP_204_NO_CONTENT)

    def _update(self, request, pk, partial):
        task = get_object_or_404(Task, pk=pk)
        serializer = TaskSerializer(task, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(serializer.data)


class TaskComplete(APIView):
    """
    POST /api/tasks/<pk>/complete/
    Marks the task complete, reschedules its direct successors and re-evaluates the project.
    """

    def post(self, request, pk):
        task = get_object_or_404(Task, pk=pk)
        report = services.complete_task(task)
        return Response({
            "task": TaskSerializer(task).data,
            "rescheduled": TaskSerializer(report.rescheduled, many=True).data,
            "project_outcome": report.project_outcome.value if report.project_outcome else None,
        })


class TaskCascade(APIView):
    """
    POST /api/tasks/<pk>/cascade/
    Re-runs the cascade for an already completed task (idempotent).
    """

    def post(self, request, pk):
        task = get_object_or_404(Task, pk=pk)
        rescheduled = services.cascade_from_task(task)
        return Response({"rescheduled": TaskSerializer(rescheduled, many=True).data})


class TaskSuccessors(APIView):
    def get(self, request, pk):
        task = get_object_or_404(Task, pk=pk)
        successor_ids = services.load_graph().direct_successors(task.id)
        successors = Task.objects.filter(id__in=successor_ids)
        return Response(TaskSerializer(successors, many=True).data)


class TaskPredecessors(APIView):
    def get(self, request, pk):
        task = get_object_or_404(Task, pk=pk)
        predecessor_ids = services.load_graph().direct_predecessors(task.id)
        predecessors = Task.objects.filter(id__in=predecessor_ids)
        return Response(TaskSerializer(predecessors, many=True).data)


class DependencyView(APIView):
    """
    POST   /api/dependencies/  {"predecessor": id, "successor": id}  declare an edge
    DELETE /api/dependencies/  same payload (body or query string)  remove it
    """

    def post(self, request):
        serializer = DependencyInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        predecessor = get_object_or_404(Task, pk=serializer.validated_data["predecessor"])
        successor = get_object_or_404(Task, pk=serializer.validated_data["successor"])

        dependency = services.declare_dependency(predecessor, successor)
        return Response(TaskDependencySerializer(dependency).data, status=status.HTTP_201_CREATED)

    def delete(self, request):
        serializer = DependencyInputSerializer(data=request.data or request.query_params)
        serializer.is_valid(raise_exception=True)
        services.remove_dependency(
            serializer.validated_data["predecessor"],
            serializer.validated_data["successor"],
        )
        return Response(status=status.HTTP_204_NO_CONTENT)


class TaskAssign(APIView):
    """PUT /api/tasks/<pk>/assign/<user_id>/"""

    def put(self, request, pk, user_id):
        task = get_object_or_404(Task, pk=pk)
        user = get_object_or_404(get_user_model(), pk=user_id)
        services.assign_task(task, user)
        return Response(TaskSerializer(task).data)


class UserTasks(APIView):
    """GET /api/users/<user_id>/tasks/"""

    def get(self, request, user_id):
        user = get_object_or_404(get_user_model(), pk=user_id)
        return Response(TaskSerializer(user.assigned_tasks.all(), many=True).data)
