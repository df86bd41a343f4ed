from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from users.models import User, Following, Follower, WaitingFollower


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Admin for email-identified users with profile and visibility fields."""
    ordering = ('nickname',)
    list_display = ('nickname', 'email', 'signup_type', 'public', 'is_staff')
    list_filter = ('public', 'signup_type', 'is_staff', 'is_active')
    search_fields = ('nickname', 'email', 'name')
    fieldsets = (
        (None, {'fields': ('email', 'password')}),
        ('Profile', {'fields': ('nickname', 'name', 'website', 'bio', 'profile_photo_url', 'public', 'signup_type')}),
        ('Permissions', {'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions')}),
        ('Important dates', {'fields': ('last_login', 'date_joined')}),
    )
    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'nickname', 'password1', 'password2'),
        }),
    )


class RelationEdgeAdmin(admin.ModelAdmin):
    """
    Read-only listing of relation edges.

    Edges only change through follow transitions, which keep both users'
    sets in step; editing one table by hand would break that.
    """
    list_display = ('owner', 'user', 'nickname', 'created_at')
    search_fields = ('owner__nickname', 'user__nickname')
    readonly_fields = ('owner', 'user', 'nickname', 'profile_photo_url', 'created_at')

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False


admin.site.register(Following, RelationEdgeAdmin)
admin.site.register(Follower, RelationEdgeAdmin)
admin.site.register(WaitingFollower, RelationEdgeAdmin)
