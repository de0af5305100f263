"""
Collecting and explaining problems.

Nothing in here decides anything. The passes decide; this module remembers
what they complained about and, eventually, draws a picture of it with the
offending source text underlined.
"""
import sys, random
from functools import lru_cache
from typing import Any, Optional, Sequence
from boozetools.support.failureprone import SourceText, illustration

class TooManyIssues(Exception):
	pass

def _outburst():
	particle = ["Oh, ", "Well, ", "Hmm. ", "", ""]
	grumbles = [
		'Bother', 'Blast', 'Drat', 'Fiddlesticks', 'Gadzooks',
		'Oh dear', 'Rats', 'Shucks', 'Sugar', 'Thunderation',
	]
	verdicts = [
		'These types do not add up.',
		'Something in here will not go.',
		'The declarations disagree with each other.',
		'I cannot vouch for this.',
	]
	return "%s%s! %s" % tuple(map(random.choice, (particle, grumbles, verdicts)))

class Report:
	""" Accumulates issues; optionally chatters about progress. """
	_issues : list["Pic"]

	def __init__(self, *, verbose:int=0, max_issues=3):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._max_issues = max_issues

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)

	@property
	def issues(self) -> list["Pic"]: return list(self._issues)

	def issue(self, it:"Pic"):
		self._issues.append(it)
		if len(self._issues) == self._max_issues:
			raise TooManyIssues(self)

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def notice(self, message:str):
		""" Not a problem as such, but worth a mention. """
		print("Notice:", message, file=sys.stderr)

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self._issues)

	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self._issues:
			self.complain_to_console()
			raise AssertionError(_outburst()+" "+message)

	# Methods the front-end is likely to call:
	def generic_parse_error(self, document, span:Optional[slice], message:str, hint:str):
		problem = [Annotation(document, span, "got confused here")] if span is not None else []
		footer = [hint] if hint else []
		self.issue(Pic(message, problem, footer))

	def redeclared_member(self, document, what:str, first:slice, again:slice):
		intro = "%s is declared more than once in the same place." % what
		problem = [Annotation(document, first, "Earliest declaration"), Annotation(document, again, "Again")]
		self.issue(Pic(intro, problem))

	def no_such_file(self, path):
		self.issue(Pic("I see no file called %s" % path, []))

	def broken_file(self, path):
		self.issue(Pic("Something went pear-shaped while trying to read %s" % path, []))

	# Methods the class-table builder calls:
	def redefined_class(self, document, name:str, first:Optional[slice], guilty:slice):
		intro = "Class %s is defined more than once." % name
		problem = [Annotation(document, guilty, "This one")]
		if first is None: problem.append(_Remark("%s is built in." % name))
		else: problem.insert(0, Annotation(document, first, "Earliest definition"))
		self.issue(Pic(intro, problem))

	def undefined_class(self, document, name:str, guilty:slice):
		intro = "I don't see what %s refers to." % name
		self.issue(Pic(intro, [Annotation(document, guilty)]))

	def wrong_kind_of_supertype(self, document, name:str, guilty:slice, expect:str):
		intro = "%s is not %s." % (name, expect)
		self.issue(Pic(intro, [Annotation(document, guilty)]))

	def circular_inheritance(self, document, cycle:Sequence[tuple[str, slice]]):
		intro = "What we have here is a circular inheritance."
		problem = [Annotation(document, span, name) for name, span in cycle]
		self.issue(Pic(intro, problem))

	# Methods the site-resolution pass calls:
	def bad_declared_type(self, document, span:slice, message:str):
		self.issue(Pic(message, [Annotation(document, span)]))

	# Methods the inheritance checker calls:
	def incompatible_override(self, document, message:str, base:slice, override:slice, base_caption="", override_caption=""):
		problem = [
			Annotation(document, base, base_caption or "Declared here"),
			Annotation(document, override, override_caption or "Overridden here"),
		]
		self.issue(Pic(message, problem))

class _Remark:
	""" An annotation-shaped bit of text with no source location. """
	path = None
	def __init__(self, text:str): self.text = text
	def illustrate(self): return "       | " + self.text

class Annotation:
	path: Any
	slice: slice
	caption: str
	def __init__(self, document, span:slice, caption:str=""):
		self.path = document.path
		self.document = document
		self.slice = span
		self.caption = caption
	def illustrate(self):
		source = _fetch(self.document.text)
		row, col = source.find_row_col(self.slice.start)
		single_line = source.line_of_text(row)
		width = max(1, min(self.slice.stop, self.slice.start + len(single_line) - col) - self.slice.start)
		return illustration(single_line, col, width, prefix='% 6d |' % row, caption=self.caption)

class Pic:
	def __init__(self, intro:str, anns:list, footer=()):
		self._intro, self._anns, self._footer = intro, anns, footer
	@property
	def description(self) -> str: return self._intro
	def as_text(self):
		lines = [self._intro, ""]
		path = None
		for ann in self._anns:
			if ann.path != path and ann.path is not None:
				path = ann.path
				lines.append(str(path))
			lines.append(ann.illustrate())
		lines.extend(self._footer)
		return '\n'.join(lines)

@lru_cache(5)
def _fetch(text:str) -> SourceText:
	return SourceText(text)

def _bemoan(issues):
	""" Emit all the issues to the console. """
	if issues:
		print("*"*60, file=sys.stderr)
		print(_outburst(), file=sys.stderr)
	for i in issues:
		print("  -"*20, file=sys.stderr)
		print(i.as_text(), file=sys.stderr)
	sys.stderr.flush()
