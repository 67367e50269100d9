from django.urls import path

from . import views

urlpatterns = [
    path("projects/", views.ProjectList.as_view(), name="project-list"),
    path("projects/<int:pk>/", views.ProjectDetail.as_view(), name="project-detail"),
    path("projects/<int:pk>/evaluate-completion/", views.ProjectEvaluateCompletion.as_view(),
         name="project-evaluate-completion"),
    path("tasks/", views.TaskList.as_view(), name="task-list"),
    path("tasks/<int:pk>/", views.TaskDetail.as_view(), name="task-detail"),
    path("tasks/<int:pk>/complete/", views.TaskComplete.as_view(), name="task-complete"),
    path("tasks/<int:pk>/cascade/", views.TaskCascade.as_view(), name="task-cascade"),
    path("tasks/<int:pk>/successors/", views.TaskSuccessors.as_view(), name="task-successors"),
    path("tasks/<int:pk>/predecessors/", views.TaskPredecessors.as_view(), name="task-predecessors"),
    path("tasks/<int:pk>/assign/<int:user_id>/", views.TaskAssign.as_view(), name="task-assign"),
    path("users/<int:user_id>/tasks/", views.UserTasks.as_view(), name="user-tasks"),
    path("dependencies/", views.DependencyView.as_view(), name="dependencies"),
]
