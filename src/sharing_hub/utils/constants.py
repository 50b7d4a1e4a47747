"""Centralized constants for the Sharing Hub client."""

# MIME Types - Google Apps
FOLDER_MIME_TYPE = 'application/vnd.google-apps.folder'
SHORTCUT_MIME_TYPE = 'application/vnd.google-apps.shortcut'

# Drive v3 field selectors
RESOURCE_FIELDS = (
    'id, name, mimeType, createdTime, parents, ownedByMe, shared, '
    'driveId, teamDriveId, shortcutDetails, description, webViewLink, trashed'
)
LIST_FIELDS = f'nextPageToken, files({RESOURCE_FIELDS})'
FILE_INFO_FIELDS = (
    f'{RESOURCE_FIELDS}, modifiedTime, owners, sharingUser, capabilities, size, permissions'
)

# Metadata keys that carry a shared drive id (current, legacy, picker)
SHARED_DRIVE_KEYS = ('driveId', 'teamDriveId', 'sharedDriveId')

# Query defaults
DEFAULT_PAGE_SIZE = 100
ORDER_NEWEST_FIRST = 'createdTime desc'
MY_DRIVE_ROOT = 'root'

# Context labels for project references
LABEL_SHARED_DRIVE = 'Shared Drive'
LABEL_SHARED_FOLDER = 'Shared Folder'
LABEL_PERSONAL_DRIVE = 'Personal Drive'

# Access Roles
ROLE_READER = 'reader'
ROLE_WRITER = 'writer'
ROLE_COMMENTER = 'commenter'
GRANTABLE_ROLES = (ROLE_READER, ROLE_COMMENTER, ROLE_WRITER)

# Permission Types
PERM_TYPE_USER = 'user'

# Ledger categories
CATEGORY_DRIVE_LOGIN = 'Google Drive login'
CATEGORY_ONE_TAP = 'One Tap login'
CATEGORY_PROFILE = 'Profile fetch'
CATEGORY_APP_FOLDER = 'App folder setup'
CATEGORY_REFERENCES_FETCH = 'Project references fetch'
CATEGORY_REFERENCE_CREATE = 'Project reference creation'
CATEGORY_FOLDER_CREATE = 'Folder creation'
CATEGORY_FILE_CREATE = 'File creation'
CATEGORY_FILE_FETCH = 'File fetch'
CATEGORY_SHARE = 'Share'
CATEGORY_FOLDERS_FETCH = 'Folders fetch'
CATEGORY_SHARED_FETCH = 'Shared with me fetch'
CATEGORY_FILES_FETCH = 'Files fetch'
