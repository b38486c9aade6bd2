"""이 파일은 .py Individual 분석 플러그인으로 경고의 파일 경로를 정규화합니다."""

from drone.core.plugin_base import IndividualAnalysis, PluginOptions
from drone.core.types import Issue


class RelativePathOptions(PluginOptions):
    strip_prefix: str = ""
    prepend: str = ""
    field: str = "file"


class RelativePath(IndividualAnalysis):
    options_model = RelativePathOptions

    def analyse(self, issue: Issue) -> Issue:
        path = issue.get(self.options.field)
        if not isinstance(path, str):
            return issue
        # 접두어 제거 후 새 접두어를 붙인다. 구분자는 하나만 남긴다.
        if self.options.strip_prefix and path.startswith(self.options.strip_prefix):
            path = path[len(self.options.strip_prefix):].lstrip("/")
        if self.options.prepend:
            path = f"{self.options.prepend.rstrip('/')}/{path}"
        return {**issue, self.options.field: path}
