PACKAGE_NAME = 'giteeupload'

HOME_ENV = 'GITEEUPLOAD_HOME'

CONFIG_FILE = 'config.toml'
SETTINGS_FILE = 'settings.json'
DATA_FILE = 'data.json'

API_ROOT = 'https://gitee.com/api/v5'

# 单个文件大小上限: 10MB
MAX_FILE_SIZE = 10 * 1024 * 1024

NOTICE_DURATION = 5000

COMMIT_MESSAGE = 'upload image'

DEFAULT_SETTINGS = {
    'repo': '',
    'branch': 'master',
    'path': '/',
    'token': '',
    'prompt_sub_path': True,
}

# noinspection SpellCheckingInspection
INIT_CONFIG_TEXT = """
# 配置 Gitee 仓库
#
# 这里的值只作为初始值，通过 `giteeupload config set` 修改的设置
# 会保存在同目录下的 settings.json 中并覆盖这里的配置。

# [gitee]
#
# repo = "<OWNER>/<REPO>"
# branch = "master"
# path = "/"
# token = "<YOUR GITEE PRIVATE TOKEN>"
# prompt_sub_path = true

"""
